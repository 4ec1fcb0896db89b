"""
Targeting Context

Responsibilities:
- Canonicalizes keywords through data-driven pattern tables and synonym maps
- Matches job keywords against résumé keywords (exact, synonym, partial, fuzzy)
- Scores a résumé against a posting (weighted 0-100 ATS score with breakdown)
- Generates prioritized improvement suggestions
- Compares two résumé versions against the same posting

Owns: Matching strategy, scoring model, suggestion rules
Never: Modifies résumé text or touches document files
"""
