# lexi/app.py
# Lexi Legal AI: draft legal documents and X-ray existing ones with Gemini
# Run: python -m lexi

import io
import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response, StreamingResponse

from lexi import config
from lexi.catalog import DOC_TEMPLATES, get_template, search_templates
from lexi.exceptions import LexiError
from lexi.flows import AnalysisFlow, ChatSession, GenerationFlow, TranscriptionFlow
from lexi.gemini_service import LegalAIService, get_ai_service
from lexi.models import (
    AnalysisResult,
    ChatRequest,
    ChatResponse,
    ExportDocumentRequest,
    GenerateRequest,
    GenerateResponse,
    SpeakRequest,
    TemplateOut,
    Theme,
    ThemeRequest,
    ThemeResponse,
    TranscriptionResponse,
)
from lexi.normalizer import render_markdown
from lexi.reports import document_filename, render_document_pdf, render_report_pdf, report_filename
from lexi.state import AppState, AppView, theme_preference
from lexi.uploads import UploadedFile, guess_mime_type
from lexi.web import render_page

logger = logging.getLogger(__name__)


# --- FASTAPI APP ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    config.configure_logging()
    logger.info("🚀 Starting Lexi Legal AI...")
    logger.info(f"📚 Catalog contains {len(DOC_TEMPLATES)} document templates")
    if not config.API_KEY:
        logger.warning("⚠️ GOOGLE_API_KEY is not set; drafting and analysis will be unavailable.")
    logger.info("✅ Application startup complete.")
    yield
    logger.info("🌙 Application shutting down.")


app = FastAPI(title="Lexi Legal AI", lifespan=lifespan)


@app.exception_handler(LexiError)
async def lexi_error_handler(request: Request, exc: LexiError):
    logger.info(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def app_state(request: Request) -> AppState:
    return AppState(theme=theme_preference.load(request.cookies))


def pdf_response(pdf_bytes: bytes, filename: str) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def read_upload(file: UploadFile) -> UploadedFile:
    data = await file.read()
    filename = file.filename or "upload"
    return UploadedFile(filename=filename, mime_type=guess_mime_type(filename, file.content_type), data=data)


# --- PAGES ---
@app.get("/", response_class=HTMLResponse)
async def dashboard(q: str = "", state: AppState = Depends(app_state)):
    return render_page(state.go_home(), query=q)


@app.get("/generate/{template_id}", response_class=HTMLResponse)
async def generator(template_id: str, state: AppState = Depends(app_state)):
    state = state.select_template(template_id)
    if state.view is not AppView.GENERATOR:
        return RedirectResponse("/", status_code=303)
    return render_page(state)


@app.get("/analyze", response_class=HTMLResponse)
async def analyzer(state: AppState = Depends(app_state)):
    return render_page(state.navigate(AppView.ANALYZER))


@app.get("/about", response_class=HTMLResponse)
async def about(state: AppState = Depends(app_state)):
    return render_page(state.navigate(AppView.ABOUT))


@app.get("/health")
async def health(service: LegalAIService = Depends(get_ai_service)):
    return {"status": "ok", "ai_configured": service.configured}


# --- API ROUTES ---
@app.get("/api/templates", response_model=List[TemplateOut])
async def list_templates(q: str = ""):
    return [t.to_schema() for t in search_templates(q)]


@app.post("/api/generate", response_model=GenerateResponse)
async def generate_document(req: GenerateRequest, service: LegalAIService = Depends(get_ai_service)):
    """Draft a legal document from a completed template form."""
    template = get_template(req.template_id)
    flow = GenerationFlow(template).fill(req.fields, req.details)
    logger.info(f"📝 Drafting {template.name.value}")
    document = await flow.submit(service)
    return GenerateResponse(
        title=document.title,
        content=document.content,
        html=render_markdown(document.content),
        date=document.date,
        filename=document_filename(template.name, document.date),
    )


@app.post("/api/analyze", response_model=AnalysisResult)
async def analyze_document(file: UploadFile = File(...), service: LegalAIService = Depends(get_ai_service)):
    """Run the Legal X-Ray on one image or PDF."""
    upload = await read_upload(file)
    logger.info(f"📄 Analyzing {upload.filename} ({upload.mime_type}, {upload.size_mb:.2f}MB)")
    flow = AnalysisFlow()
    flow.select_file(upload)
    return await flow.analyze(service)


@app.post("/api/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, service: LegalAIService = Depends(get_ai_service)):
    """Answer a follow-up question about an analyzed document."""
    session = ChatSession(req.analysis, history=req.history)
    reply = await session.send(service, req.message)
    return ChatResponse(reply=reply.text, html=render_markdown(reply.text), history=session.transcript)


@app.post("/api/transcribe", response_model=TranscriptionResponse)
async def transcribe(audio: UploadFile = File(...), service: LegalAIService = Depends(get_ai_service)):
    clip = await read_upload(audio)
    if clip.mime_type == "application/octet-stream":
        clip = UploadedFile(clip.filename, config.DEFAULT_AUDIO_MIME_TYPE, clip.data)
    text = await TranscriptionFlow().transcribe(service, clip)
    return TranscriptionResponse(text=text)


@app.post("/api/speak")
async def speak(req: SpeakRequest, service: LegalAIService = Depends(get_ai_service)):
    audio = await service.speak_text(req.text)
    return Response(content=audio, media_type="audio/wav")


@app.post("/api/export/document")
async def export_document(req: ExportDocumentRequest):
    template = get_template(req.template_id)
    return pdf_response(render_document_pdf(req.content), document_filename(template.name))


@app.post("/api/export/report")
async def export_report(result: AnalysisResult):
    return pdf_response(render_report_pdf(result), report_filename())


@app.post("/api/theme", response_model=ThemeResponse)
async def set_theme(req: ThemeRequest, request: Request, response: Response):
    """Persist the theme; with no theme given, toggle the stored one."""
    if req.theme:
        theme = Theme.parse(req.theme)
    else:
        theme = theme_preference.load(request.cookies).toggled()
    theme_preference.save(response, theme)
    return ThemeResponse(theme=theme)
