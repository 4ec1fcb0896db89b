"""
Tailoring Context

Responsibilities:
- Integrates missing job keywords into experience bullets and the skills list
- Reorders experience entries and bullets by keyword relevance
- Replaces weak phrasing with strong action verbs
- Records every mutation as an auditable Change
- Renders structured résumé data back to plain text

Owns: Optimization rules, Change records, plain-text résumé layout
Never: Computes scores itself (delegates to targeting), edits document files
"""
