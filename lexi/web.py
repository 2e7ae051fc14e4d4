# lexi/web.py
# Page rendering: one HTML shell, one section per view

import datetime

from jinja2 import Environment

from lexi import config
from lexi.catalog import ICON_GLYPHS, search_templates
from lexi.prompts import CHAT_GREETING
from lexi.state import AppState, AppView
from lexi.uploads import ACCEPTED_DOCUMENT_TYPES

HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en" data-theme="{{ state.theme.value }}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Lexi - AI Legal Guardian</title>
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&family=Merriweather:wght@400;700&display=swap" rel="stylesheet">
    <style>
        :root {
            --bg-color: #F8FAFC;
            --card-bg: #FFFFFF;
            --border-color: #E2E8F0;
            --text-color: #0F172A;
            --text-muted: #64748B;
            --primary-accent: #2563EB;
            --primary-hover: #1D4ED8;
            --analyze-accent: #4F46E5;
            --disabled-bg: #CBD5E1;
            --high-risk-bg: #FEF2F2; --high-risk-fg: #B91C1C;
            --medium-risk-bg: #FEFCE8; --medium-risk-fg: #A16207;
            --low-risk-bg: #F0FDF4; --low-risk-fg: #15803D;
            --font-family: 'Inter', sans-serif;
        }
        [data-theme="dark"] {
            --bg-color: #0F172A;
            --card-bg: #1E293B;
            --border-color: #334155;
            --text-color: #F1F5F9;
            --text-muted: #94A3B8;
            --disabled-bg: #334155;
            --high-risk-bg: #450A0A; --high-risk-fg: #FECACA;
            --medium-risk-bg: #422006; --medium-risk-fg: #FEF08A;
            --low-risk-bg: #052E16; --low-risk-fg: #BBF7D0;
        }

        * { box-sizing: border-box; margin: 0; padding: 0; }
        body { font-family: var(--font-family); background: var(--bg-color); color: var(--text-color); line-height: 1.6; min-height: 100vh; display: flex; flex-direction: column; }
        a { color: inherit; text-decoration: none; }

        header.topbar { background: var(--card-bg); border-bottom: 1px solid var(--border-color); position: sticky; top: 0; z-index: 50; }
        .topbar-inner { max-width: 1200px; margin: 0 auto; padding: 0 20px; height: 64px; display: flex; align-items: center; justify-content: space-between; }
        .brand { display: flex; align-items: center; gap: 8px; font-size: 1.3rem; font-weight: 700; }
        .brand .logo { width: 32px; height: 32px; border-radius: 8px; background: var(--primary-accent); color: #fff; display: flex; align-items: center; justify-content: center; }
        nav { display: flex; gap: 10px; }
        .nav-btn { padding: 8px 14px; border-radius: 8px; font-size: 0.9rem; font-weight: 500; color: var(--text-muted); background: none; border: none; cursor: pointer; }
        .nav-btn.active, .nav-btn:hover { background: var(--bg-color); color: var(--text-color); }

        main { flex-grow: 1; max-width: 1200px; width: 100%; margin: 0 auto; padding: 30px 20px; }
        .card { background: var(--card-bg); border: 1px solid var(--border-color); border-radius: 16px; padding: 24px; margin-bottom: 20px; }
        .card-header { font-size: 1.15rem; font-weight: 600; margin-bottom: 14px; }
        .muted { color: var(--text-muted); }
        .back-link { display: inline-block; margin-bottom: 20px; color: var(--text-muted); }

        button.primary { background: var(--primary-accent); color: #fff; border: none; border-radius: 10px; padding: 14px 28px; font-weight: 600; font-size: 1rem; cursor: pointer; transition: all 0.2s ease; }
        button.primary:hover:not(:disabled) { background: var(--primary-hover); transform: translateY(-1px); }
        button.primary.analyze { background: var(--analyze-accent); }
        button:disabled { background: var(--disabled-bg) !important; color: var(--text-muted) !important; cursor: not-allowed; }
        button.secondary { background: var(--card-bg); color: var(--text-color); border: 1px solid var(--border-color); border-radius: 10px; padding: 10px 18px; cursor: pointer; }

        .hero { text-align: center; padding: 40px 20px; }
        .hero h1 { font-size: 2.6rem; font-weight: 700; margin-bottom: 12px; }
        .hero p { color: var(--text-muted); max-width: 640px; margin: 0 auto 24px; }
        .section-head { display: flex; justify-content: space-between; align-items: center; gap: 20px; margin: 20px 0; flex-wrap: wrap; }
        .template-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(260px, 1fr)); gap: 18px; }
        .template-card { display: block; background: var(--card-bg); border: 1px solid var(--border-color); border-radius: 14px; padding: 20px; transition: all 0.2s ease; }
        .template-card:hover { border-color: var(--primary-accent); transform: translateY(-3px); }
        .template-card .icon { font-size: 1.6rem; margin-bottom: 8px; }
        .template-card h3 { font-size: 1rem; margin-bottom: 4px; }

        input[type="text"], input[type="search"], textarea { width: 100%; padding: 12px 14px; border-radius: 10px; border: 1px solid var(--border-color); background: var(--bg-color); color: var(--text-color); font-size: 1rem; font-family: inherit; }
        textarea { min-height: 140px; resize: vertical; }
        input:focus, textarea:focus { outline: none; border-color: var(--primary-accent); }
        label { display: block; font-weight: 500; margin-bottom: 6px; }
        .field { margin-bottom: 16px; }
        .form-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(240px, 1fr)); gap: 0 16px; }
        .details-head { display: flex; justify-content: space-between; align-items: center; }

        .mic-btn { border: none; border-radius: 50%; width: 36px; height: 36px; cursor: pointer; background: var(--bg-color); color: var(--text-color); }
        .mic-btn.recording { background: #DC2626; color: #fff; animation: pulse 1.2s infinite; }

        .paper { background: #fff; color: #111; font-family: 'Merriweather', serif; max-width: 210mm; margin: 0 auto; padding: 25mm; box-shadow: 0 10px 30px rgba(0,0,0,0.15); }
        .paper h1 { text-align: center; text-transform: uppercase; font-size: 1.4rem; margin-bottom: 20px; }
        .paper h2, .paper h3 { margin: 18px 0 8px; font-size: 1.05rem; }
        .paper p, .paper li { margin-bottom: 10px; text-align: justify; }
        .paper ul, .paper ol { padding-left: 24px; }
        .result-toolbar { display: flex; justify-content: space-between; align-items: center; margin-bottom: 20px; gap: 10px; }

        .analyzer-grid { display: grid; grid-template-columns: minmax(300px, 1fr) 2fr; gap: 24px; }
        @media (max-width: 900px) { .analyzer-grid { grid-template-columns: 1fr; } }
        .drop-zone { position: relative; border: 2px dashed var(--border-color); border-radius: 12px; padding: 30px; text-align: center; cursor: pointer; min-height: 200px; display: flex; flex-direction: column; align-items: center; justify-content: center; }
        .drop-zone:hover { border-color: var(--analyze-accent); }
        .drop-zone img { max-width: 100%; max-height: 260px; border-radius: 8px; }
        .remove-btn { position: absolute; top: 8px; right: 8px; border: none; background: var(--card-bg); border-radius: 50%; width: 28px; height: 28px; cursor: pointer; color: var(--text-color); }
        .risk-badge { display: inline-block; padding: 6px 14px; border-radius: 999px; font-weight: 700; border: 1px solid; }
        .risk-HIGH { background: var(--high-risk-bg); color: var(--high-risk-fg); }
        .risk-MEDIUM { background: var(--medium-risk-bg); color: var(--medium-risk-fg); }
        .risk-LOW { background: var(--low-risk-bg); color: var(--low-risk-fg); }
        .report ul { padding-left: 20px; }
        .report li { margin-bottom: 6px; }
        .placeholder { text-align: center; padding: 60px 20px; color: var(--text-muted); }

        .chat-box { height: 340px; overflow-y: auto; background: var(--bg-color); padding: 14px; border-radius: 10px; display: flex; flex-direction: column; gap: 10px; }
        .msg { padding: 10px 14px; border-radius: 14px; max-width: 85%; font-size: 0.95rem; }
        .msg.user { background: var(--primary-accent); color: #fff; align-self: flex-end; border-top-right-radius: 2px; white-space: pre-wrap; }
        .msg.assistant { background: var(--card-bg); border: 1px solid var(--border-color); align-self: flex-start; border-top-left-radius: 2px; }
        .msg.assistant ul, .msg.assistant ol { padding-left: 18px; }
        .chat-input { display: flex; gap: 8px; margin-top: 12px; }

        .about section { margin-bottom: 24px; }
        .about h2 { margin-bottom: 10px; }
        .about p { margin-bottom: 10px; }

        footer { background: var(--card-bg); border-top: 1px solid var(--border-color); padding: 28px 20px; text-align: center; color: var(--text-muted); font-size: 0.85rem; }
        .hidden { display: none !important; }
        .loader { border: 4px solid var(--border-color); border-top: 4px solid var(--primary-accent); border-radius: 50%; width: 40px; height: 40px; animation: spin 1s linear infinite; margin: 30px auto; }
        @keyframes spin { 100% { transform: rotate(360deg); } }
        @keyframes pulse { 0%, 100% { opacity: 1; } 50% { opacity: 0.6; } }
    </style>
</head>
<body data-view="{{ state.view.value }}">
    <header class="topbar">
        <div class="topbar-inner">
            <a href="/" class="brand"><span class="logo">⚖️</span>Lexi</a>
            <nav>
                <a href="/about" class="nav-btn {{ 'active' if state.view.value == 'ABOUT' else '' }}">ℹ️ About</a>
                <button id="themeToggle" class="nav-btn" title="Toggle theme">{{ '☀️' if state.theme.value == 'dark' else '🌙' }}</button>
            </nav>
        </div>
    </header>

    <main>
    {% if state.view.value == 'DASHBOARD' %}
        <div class="hero">
            <h1>Your AI Legal Guardian</h1>
            <p>Create rock-solid contracts or analyze existing ones instantly with AI. No jargon, no expensive fees.</p>
            <a href="/analyze"><button class="primary analyze">🔍 Analyze a Document (X-Ray)</button></a>
        </div>
        <div class="section-head">
            <h2>📝 Create a Document</h2>
            <form method="get" action="/" style="min-width: 320px;">
                <input type="search" id="templateSearch" name="q" value="{{ query }}" placeholder="Search templates (e.g. Lease, NDA)...">
            </form>
        </div>
        <div id="templateGrid" class="template-grid">
            {% for t in templates %}
            <a class="template-card" href="/generate/{{ t.id }}" data-search="{{ (t.name.value ~ ' ' ~ t.description) | lower }}">
                <div class="icon">{{ icons.get(t.icon, '📄') }}</div>
                <h3>{{ t.name.value }}</h3>
                <p class="muted">{{ t.description }}</p>
            </a>
            {% endfor %}
        </div>
        <div id="noTemplates" class="placeholder {{ '' if not templates else 'hidden' }}">No templates found. Try a different search term.</div>

    {% elif state.view.value == 'GENERATOR' %}
        <a href="/" class="back-link">← Back to Dashboard</a>
        <div id="generatorForm" class="card">
            <div class="card-header">{{ icons.get(state.template.icon, '📄') }} {{ state.template.name.value }}</div>
            <p class="muted" style="margin-bottom: 20px;">{{ state.template.description }} Fill in every field below.</p>
            <div class="form-grid">
                {% for field in state.template.required_fields %}
                <div class="field">
                    <label for="field-{{ loop.index }}">{{ field }} *</label>
                    <input type="text" id="field-{{ loop.index }}" class="required-field" data-field="{{ field }}" placeholder="Enter {{ field }}...">
                </div>
                {% endfor %}
            </div>
            <div class="field">
                <div class="details-head">
                    <label for="additionalDetails">Additional Details *</label>
                    <button type="button" id="micBtn" class="mic-btn" title="Dictate details">🎙️</button>
                </div>
                <textarea id="additionalDetails" placeholder="Describe any specific terms, payment schedules, special conditions, or custom clauses you want included..."></textarea>
            </div>
            <button id="generateBtn" class="primary" disabled>✨ Generate Document</button>
        </div>
        <div id="generatorResult" class="hidden">
            <div class="result-toolbar">
                <button id="editBtn" class="secondary">✏️ Edit Details</button>
                <button id="downloadDocBtn" class="primary">⬇️ Download PDF</button>
            </div>
            <div class="paper"><div id="documentContent"></div></div>
        </div>

    {% elif state.view.value == 'ANALYZER' %}
        <a href="/" class="back-link">← Back to Dashboard</a>
        <div class="analyzer-grid">
            <div>
                <div class="card">
                    <div class="card-header">📤 Upload Document</div>
                    <div id="dropZone" class="drop-zone">
                        <button id="removeFileBtn" class="remove-btn hidden" title="Remove file">✕</button>
                        <div id="previewArea" class="muted">Click to upload an image or PDF (max {{ max_file_mb }}MB)</div>
                        <input type="file" id="documentUpload" accept="{{ accepted_types }}" class="hidden">
                    </div>
                    <button id="analyzeBtn" class="primary analyze" style="width: 100%; margin-top: 16px;" disabled>🩻 Analyze Document</button>
                </div>
                <div id="chatCard" class="card hidden">
                    <div class="card-header">🤖 Legal Assistant</div>
                    <div id="chatBox" class="chat-box"></div>
                    <div class="chat-input">
                        <input type="text" id="chatInput" placeholder="Ask a legal question about this document...">
                        <button id="chatSendBtn" class="primary" style="padding: 10px 16px;" disabled>➤</button>
                    </div>
                    <p class="muted" style="font-size: 0.75rem; margin-top: 8px;">AI can make mistakes. Always consult a qualified attorney.</p>
                </div>
            </div>
            <div>
                <div id="reportPlaceholder" class="card placeholder">🔎 Upload a document and run the analysis to see its risk report here.</div>
                <div id="reportLoader" class="card hidden"><div class="loader"></div><p class="placeholder" style="padding: 0;">Reading every clause. Deep analysis can take a minute...</p></div>
                <div id="report" class="card report hidden">
                    <div class="result-toolbar">
                        <span id="riskBadge" class="risk-badge"></span>
                        <div>
                            <button id="listenBtn" class="secondary">🔊 Listen</button>
                            <button id="downloadReportBtn" class="primary" style="padding: 10px 18px;">⬇️ Download Report PDF</button>
                        </div>
                    </div>
                    <h3 class="card-header">📋 Summary</h3>
                    <p id="reportSummary" style="margin-bottom: 20px;"></p>
                    <h3 class="card-header">⚠️ Risk Assessment</h3>
                    <ul id="reportRisks" style="margin-bottom: 20px;"></ul>
                    <h3 class="card-header">💬 Plain English Translation</h3>
                    <p id="reportTranslation" style="margin-bottom: 20px;"></p>
                    <div id="hiddenClausesSection">
                        <h3 class="card-header">🕵️ Hidden Clauses</h3>
                        <ul id="reportHiddenClauses"></ul>
                    </div>
                </div>
            </div>
        </div>

    {% else %}
        <a href="/" class="back-link">← Back to Dashboard</a>
        <div class="card about">
            <section>
                <h1>About Lexi</h1>
                <p class="muted">Bridging the gap between complex legal systems and everyday people using advanced Artificial Intelligence.</p>
            </section>
            <section>
                <h2>Our Mission</h2>
                <p>Access to legal protection is a fundamental right, yet for millions of people the legal system remains opaque, expensive and intimidating. <strong>Lexi</strong> was built to democratize this access.</p>
                <p>Understanding a contract shouldn't require a law degree. Lexi serves as an "AI Legal Guardian" for freelancers, tenants, small business owners and everyday individuals.</p>
            </section>
            <section>
                <h2>How It Works</h2>
                <p><strong>Smart Drafting.</strong> Lexi asks for the key details of your agreement and uses Generative AI to draft a formally structured document in Markdown, ready to export as a PDF.</p>
                <p><strong>Legal X-Ray.</strong> Upload a photo or PDF of any contract. Lexi reads every clause and produces a Risk Report: a plain summary, an overall risk level, specific risks, a plain-English translation of the hardest clause, and hidden clauses worth a second look. You can then ask follow-up questions about the report.</p>
            </section>
            <section>
                <h2>Privacy</h2>
                <p>Lexi keeps nothing about your documents. Files are sent to the AI service for a single request and the conversation lives only in your browser tab.</p>
            </section>
        </div>
    {% endif %}
    </main>

    <footer>
        <p>© {{ year }} Lexi Legal AI. Powered by Gemini.</p>
        <p style="margin-top: 6px;">Disclaimer: Lexi is an AI tool and not a substitute for professional legal advice.</p>
    </footer>

    <script>
        const LEXI = {
            view: {{ state.view.value | tojson }},
            templateId: {{ (state.template.id if state.template else none) | tojson }},
            maxFileBytes: {{ max_file_bytes }},
            maxFileMb: {{ max_file_mb }},
            greeting: {{ greeting | tojson }}
        };

        // --- Helper Functions ---
        async function readError(response) {
            try {
                const data = await response.json();
                // request validation errors carry a list of {loc, msg, type}
                if (Array.isArray(data.detail)) return (data.detail[0] && data.detail[0].msg) || 'Invalid request.';
                return data.detail || 'Request failed.';
            } catch (e) {
                return 'Request failed with status ' + response.status + '.';
            }
        }

        async function fetchAPI(endpoint, body) {
            const options = { method: 'POST' };
            if (body instanceof FormData) {
                options.body = body;
            } else {
                options.headers = { 'Content-Type': 'application/json' };
                options.body = JSON.stringify(body || {});
            }
            const response = await fetch(endpoint, options);
            if (!response.ok) throw new Error(await readError(response));
            return response;
        }

        async function downloadPDF(endpoint, body) {
            const response = await fetchAPI(endpoint, body);
            const disposition = response.headers.get('Content-Disposition') || '';
            const match = disposition.match(/filename="?([^"]+)"?/);
            const url = URL.createObjectURL(await response.blob());
            const link = document.createElement('a');
            link.href = url;
            link.download = match ? match[1] : 'document.pdf';
            document.body.appendChild(link);
            link.click();
            link.remove();
            URL.revokeObjectURL(url);
        }

        function escapeHTML(text) {
            const div = document.createElement('div');
            div.textContent = text;
            return div.innerHTML;
        }

        // --- Theme ---
        document.getElementById('themeToggle').addEventListener('click', async () => {
            try {
                const data = await (await fetchAPI('/api/theme', {})).json();
                document.documentElement.dataset.theme = data.theme;
                document.getElementById('themeToggle').textContent = data.theme === 'dark' ? '☀️' : '🌙';
            } catch (error) {
                console.error('Theme Error:', error);
            }
        });

        // --- Dashboard Search ---
        const searchInput = document.getElementById('templateSearch');
        if (searchInput) {
            searchInput.addEventListener('input', () => {
                const term = searchInput.value.trim().toLowerCase();
                let visible = 0;
                document.querySelectorAll('.template-card').forEach(card => {
                    const match = card.dataset.search.includes(term);
                    card.classList.toggle('hidden', !match);
                    if (match) visible++;
                });
                document.getElementById('noTemplates').classList.toggle('hidden', visible > 0);
            });
        }

        // --- Audio Recorder ---
        function setupRecorder(button, onTranscription) {
            let mediaRecorder = null, chunks = [], busy = false;

            async function transcribe(blob) {
                if (blob.size > LEXI.maxFileBytes) {
                    alert('Audio recording is too long. Please record shorter segments (under 2 minutes).');
                    return;
                }
                busy = true;
                button.disabled = true;
                button.textContent = '⏳';
                try {
                    const form = new FormData();
                    form.append('audio', blob, 'recording.webm');
                    const data = await (await fetchAPI('/api/transcribe', form)).json();
                    onTranscription(data.text);
                } catch (error) {
                    console.error(error);
                    alert(error.message || 'Failed to transcribe audio.');
                } finally {
                    busy = false;
                    button.disabled = false;
                    button.textContent = '🎙️';
                }
            }

            button.addEventListener('click', async () => {
                if (busy) return;
                if (mediaRecorder && mediaRecorder.state === 'recording') {
                    mediaRecorder.stop();
                    return;
                }
                try {
                    const stream = await navigator.mediaDevices.getUserMedia({ audio: true });
                    mediaRecorder = new MediaRecorder(stream);
                    chunks = [];
                    mediaRecorder.ondataavailable = (e) => { if (e.data.size > 0) chunks.push(e.data); };
                    mediaRecorder.onstop = () => {
                        stream.getTracks().forEach(track => track.stop());
                        button.classList.remove('recording');
                        button.textContent = '🎙️';
                        transcribe(new Blob(chunks, { type: 'audio/webm' }));
                    };
                    mediaRecorder.start();
                    button.classList.add('recording');
                    button.textContent = '⏹';
                } catch (err) {
                    console.error('Error accessing microphone:', err);
                    alert('Could not access microphone.');
                }
            });
        }

        // --- Generator ---
        if (LEXI.view === 'GENERATOR') {
            const fields = Array.from(document.querySelectorAll('.required-field'));
            const details = document.getElementById('additionalDetails');
            const generateBtn = document.getElementById('generateBtn');
            let generatedContent = null, isLoading = false;

            const isFormValid = () =>
                fields.every(input => input.value.trim().length > 0) && details.value.trim().length > 0;
            const refresh = () => { generateBtn.disabled = isLoading || !isFormValid(); };

            fields.forEach(input => input.addEventListener('input', refresh));
            details.addEventListener('input', refresh);
            setupRecorder(document.getElementById('micBtn'), (text) => {
                details.value = details.value ? details.value + ' ' + text : text;
                refresh();
            });

            generateBtn.addEventListener('click', async () => {
                if (!isFormValid() || isLoading) return;
                isLoading = true;
                refresh();
                generateBtn.textContent = '⏳ Drafting your document...';
                const values = {};
                fields.forEach(input => { values[input.dataset.field] = input.value; });
                try {
                    const data = await (await fetchAPI('/api/generate', {
                        template_id: LEXI.templateId, fields: values, details: details.value
                    })).json();
                    generatedContent = data.content;
                    document.getElementById('documentContent').innerHTML = data.html;
                    document.getElementById('generatorForm').classList.add('hidden');
                    document.getElementById('generatorResult').classList.remove('hidden');
                } catch (error) {
                    console.error(error);
                    alert(error.message);
                } finally {
                    isLoading = false;
                    generateBtn.textContent = '✨ Generate Document';
                    refresh();
                }
            });

            document.getElementById('editBtn').addEventListener('click', () => {
                document.getElementById('generatorResult').classList.add('hidden');
                document.getElementById('generatorForm').classList.remove('hidden');
            });

            const downloadBtn = document.getElementById('downloadDocBtn');
            downloadBtn.addEventListener('click', async () => {
                if (!generatedContent) return;
                downloadBtn.disabled = true;
                downloadBtn.textContent = '⏳ Generating PDF...';
                try {
                    await downloadPDF('/api/export/document', { template_id: LEXI.templateId, content: generatedContent });
                } catch (error) {
                    console.error('PDF generation failed', error);
                    alert('Failed to download PDF.');
                } finally {
                    downloadBtn.disabled = false;
                    downloadBtn.textContent = '⬇️ Download PDF';
                }
            });
        }

        // --- Analyzer ---
        if (LEXI.view === 'ANALYZER') {
            const fileInput = document.getElementById('documentUpload');
            const dropZone = document.getElementById('dropZone');
            const previewArea = document.getElementById('previewArea');
            const removeBtn = document.getElementById('removeFileBtn');
            const analyzeBtn = document.getElementById('analyzeBtn');
            const chatInput = document.getElementById('chatInput');
            const chatSendBtn = document.getElementById('chatSendBtn');
            const chatBox = document.getElementById('chatBox');
            let file = null, result = null, isAnalyzing = false;
            let transcript = [], isChatLoading = false;

            const show = (id, visible) => document.getElementById(id).classList.toggle('hidden', !visible);
            const refresh = () => {
                analyzeBtn.disabled = !file || isAnalyzing;
                removeBtn.classList.toggle('hidden', !file || isAnalyzing);
                chatSendBtn.disabled = !chatInput.value.trim() || isChatLoading;
                chatInput.disabled = isChatLoading;
            };

            function clearReport() {
                result = null;
                show('report', false);
                show('chatCard', false);
                show('reportPlaceholder', true);
            }

            dropZone.addEventListener('click', () => { if (!isAnalyzing) fileInput.click(); });
            fileInput.addEventListener('click', (e) => e.stopPropagation());

            fileInput.addEventListener('change', () => {
                const selected = fileInput.files[0];
                if (!selected) return;
                if (selected.size > LEXI.maxFileBytes) {
                    alert('File is too large (' + (selected.size / 1024 / 1024).toFixed(2) + 'MB). Please upload a file smaller than ' + LEXI.maxFileMb + 'MB.');
                    fileInput.value = '';
                    return;
                }
                file = selected;
                clearReport();
                if (file.type === 'application/pdf') {
                    previewArea.innerHTML = '📄<br>' + escapeHTML(file.name);
                } else {
                    const reader = new FileReader();
                    reader.onload = () => { previewArea.innerHTML = '<img alt="Preview" src="' + reader.result + '">'; };
                    reader.readAsDataURL(file);
                }
                refresh();
            });

            removeBtn.addEventListener('click', (e) => {
                e.stopPropagation();
                file = null;
                fileInput.value = '';
                previewArea.textContent = 'Click to upload an image or PDF (max ' + LEXI.maxFileMb + 'MB)';
                clearReport();
                refresh();
            });

            function renderReport(analysis) {
                const badge = document.getElementById('riskBadge');
                badge.className = 'risk-badge risk-' + analysis.riskLevel;
                badge.textContent = analysis.riskLevel + ' RISK';
                document.getElementById('reportSummary').textContent = analysis.summary;
                document.getElementById('reportRisks').innerHTML = analysis.risks.map(r => '<li>' + escapeHTML(r) + '</li>').join('');
                document.getElementById('reportTranslation').textContent = analysis.plainEnglishTranslation;
                document.getElementById('reportHiddenClauses').innerHTML = analysis.hiddenClauses.map(c => '<li>' + escapeHTML(c) + '</li>').join('');
                show('hiddenClausesSection', analysis.hiddenClauses.length > 0);
                show('report', true);
            }

            function appendMessage(role, html) {
                const div = document.createElement('div');
                div.className = 'msg ' + role;
                div.innerHTML = html;
                chatBox.appendChild(div);
                chatBox.scrollTo({ top: chatBox.scrollHeight - chatBox.clientHeight, behavior: 'smooth' });
                return div;
            }

            function resetChat() {
                transcript = [{ role: 'assistant', text: LEXI.greeting }];
                chatBox.innerHTML = '';
                appendMessage('assistant', escapeHTML(LEXI.greeting));
            }

            analyzeBtn.addEventListener('click', async () => {
                if (!file || isAnalyzing) return;
                isAnalyzing = true;
                refresh();
                show('reportPlaceholder', false);
                show('report', false);
                show('reportLoader', true);
                try {
                    const form = new FormData();
                    form.append('file', file, file.name);
                    result = await (await fetchAPI('/api/analyze', form)).json();
                    renderReport(result);
                    resetChat();
                    show('chatCard', true);
                } catch (error) {
                    console.error(error);
                    alert(error.message);
                    result = null;
                    show('reportPlaceholder', true);
                } finally {
                    isAnalyzing = false;
                    show('reportLoader', false);
                    refresh();
                }
            });

            async function sendChat() {
                const message = chatInput.value.trim();
                if (!message || isChatLoading || !result) return;
                isChatLoading = true;
                chatInput.value = '';
                refresh();
                const bubble = appendMessage('user', escapeHTML(message));
                const pending = appendMessage('assistant', '<span class="muted">Thinking...</span>');
                try {
                    const data = await (await fetchAPI('/api/chat', {
                        analysis: result, history: transcript, message: message
                    })).json();
                    transcript = data.history;
                    pending.innerHTML = data.html;
                } catch (error) {
                    console.error(error);
                    bubble.remove();
                    pending.remove();
                    chatInput.value = message;
                    alert(error.message);
                } finally {
                    isChatLoading = false;
                    refresh();
                }
            }

            chatInput.addEventListener('input', refresh);
            chatInput.addEventListener('keydown', (e) => {
                if (e.key === 'Enter' && !e.shiftKey) { e.preventDefault(); sendChat(); }
            });
            chatSendBtn.addEventListener('click', sendChat);

            const downloadBtn = document.getElementById('downloadReportBtn');
            downloadBtn.addEventListener('click', async () => {
                if (!result) return;
                downloadBtn.disabled = true;
                downloadBtn.textContent = 'Downloading...';
                try {
                    await downloadPDF('/api/export/report', result);
                } catch (error) {
                    console.error('PDF generation failed', error);
                    alert('Failed to download PDF report.');
                } finally {
                    downloadBtn.disabled = false;
                    downloadBtn.textContent = '⬇️ Download Report PDF';
                }
            });

            const listenBtn = document.getElementById('listenBtn');
            listenBtn.addEventListener('click', async () => {
                if (!result) return;
                listenBtn.disabled = true;
                try {
                    const response = await fetchAPI('/api/speak', { text: result.summary });
                    const audio = new Audio(URL.createObjectURL(await response.blob()));
                    audio.onended = () => { listenBtn.disabled = false; };
                    await audio.play();
                } catch (error) {
                    console.error(error);
                    alert(error.message);
                    listenBtn.disabled = false;
                }
            });

            refresh();
        }
    </script>
</body>
</html>
"""

_env = Environment(autoescape=True)
_page = _env.from_string(HTML_TEMPLATE)


def render_page(state: AppState, query: str = "") -> str:
    """Render the single-page shell with the section for ``state.view``."""
    templates = search_templates(query) if state.view is AppView.DASHBOARD else []
    return _page.render(
        state=state,
        templates=templates,
        query=query,
        icons=ICON_GLYPHS,
        greeting=CHAT_GREETING,
        accepted_types=ACCEPTED_DOCUMENT_TYPES,
        max_file_mb=config.MAX_FILE_SIZE_MB,
        max_file_bytes=config.MAX_FILE_SIZE_BYTES,
        year=datetime.date.today().year,
    )
