"""
Rendering Context

Responsibilities:
- Extracts positioned text lines from PDF pages
- Patches changed lines in place (white-out + redraw) with font-fit logic
- Applies line-level text improvements to PDF, DOCX and TXT files
- Rejects unsupported document formats

Owns: Document byte manipulation, line geometry, font sizing
Never: Decides what text to change (consumes optimized text from tailoring)
"""
