"""Shared fixtures: a sample résumé, a sample job posting and a controllable clock."""

import pytest

SAMPLE_RESUME = """Jane Doe
jane.doe@example.com | (555) 123-4567 | Austin, TX | linkedin.com/in/janedoe

PROFESSIONAL SUMMARY
Backend engineer with 6 years of experience building APIs and data services.

EXPERIENCE

Senior Software Engineer | Acme Corp | Jan 2020 - Present
• Built the order service using Python and Django, cutting latency by 40%
• Responsible for the deployment pipeline on AWS with Docker
• Mentored four junior engineers on code quality

Software Engineer | Initech | Jun 2016 - Dec 2019
• Developed internal reporting dashboards for finance using React.
• Managing the PostgreSQL migration for the billing team

EDUCATION
B.S. in Computer Science, State University, 2016

SKILLS
Python, Django, AWS, Docker, PostgreSQL, React, Git

CERTIFICATIONS
AWS Certified Solutions Architect
"""

SAMPLE_JOB = """Senior Backend Engineer

About Us
We build logistics software for retailers.

Responsibilities
- Design and build REST APIs using Python and Django
- Operate services on AWS with Docker and Kubernetes
- Collaborate with product on roadmap decisions

Requirements
- 5+ years of professional software development experience
- Strong Python and PostgreSQL skills
- Experience with GraphQL and Redis

Preferred
- AWS Certified Solutions Architect or similar certification
- Experience mentoring engineers

Benefits
- Full-time role with remote flexibility
"""


class FakeClock:
    """Manually advanced time source for cache tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def sample_job() -> str:
    return SAMPLE_JOB


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
