"""
Intake Context

Responsibilities:
- Validates raw résumé and job posting text
- Segments résumés into contact, summary, experience, education, skills, certifications
- Segments job postings into sections, keyword vocabularies, requirements and metadata
- Memoizes parsed job postings by content hash

Owns: Text parsing, pattern tables for section and field detection
Never: Scores, rewrites or renders anything
"""
