"""
scoring/ — Heliolus Compliance Scoring Engine

Modules:
    utils.py                - Decimal utilities and enum parsing
    policy.py               - Named scoring constants (ScoringPolicy)
    evidence_tier.py        - Evidence tier multipliers
    weighted_scorer.py      - Question / section / overall weighted scorer
    risk_components.py      - Legacy gap/risk component scores and blend
    gap_prioritization.py   - Severity, priority, effort and cost of new gaps
    strategy_matrix.py      - Timeline partition of gaps with vendor shortlist
    vendor_base_scorer.py   - Vendor base fit (coverage, size, geography, price)
    priority_boost.py       - Vendor boost from organisation priorities
    match_reasons.py        - Match explanations and comparative insights
    vendor_matcher.py       - Vendor ranking (base + boost)
"""
