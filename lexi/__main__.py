# lexi/__main__.py
# Console entry point: python -m lexi

import uvicorn

from lexi import config


def main():
    print(f"🚀 Starting Lexi Legal AI on http://localhost:{config.PORT}")
    print("📝 Features: Document Drafting, Legal X-Ray Analysis, Document Chat, Voice Dictation, PDF Export")
    uvicorn.run("lexi.app:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
