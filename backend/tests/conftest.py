"""Shared resume fixtures."""

import pytest

STRONG_RESUME = """John Doe
john.doe@email.com | (555) 123-4567 | linkedin.com/in/johndoe
San Francisco, CA

PROFESSIONAL SUMMARY
Results-driven software engineer with 6+ years building scalable web applications with JavaScript, Python and React. Delivered products used by 2 million customers and improved release speed by 40% across three product teams.

EXPERIENCE
Senior Software Engineer | TechCorp Inc | 2021 - Present
- Led a team of 6 engineers building a customer analytics platform on AWS
- Designed and implemented REST API services handling 5 million requests per day
- Reduced page load time by 35% through caching and query optimization
- Increased test coverage from 55% to 90% by introducing automated pipelines
- Mentored 4 junior developers and ran weekly code reviews for the platform group
- Partnered with product managers to plan quarterly roadmaps and release goals

Software Engineer | DataFlow Corp | 2018 - 2021
- Developed React dashboards used by 300+ clients across retail and finance
- Built data ingestion jobs in Python that processed $2M in monthly transactions
- Optimized SQL queries and cut reporting costs by 25% for the finance team
- Launched a self-service onboarding flow that improved activation by 18%
- Managed releases with Docker and Git for 12 microservices in production
- Wrote internal documentation and ran onboarding sessions for new hires

Junior Developer | BrightPath LLC | 2016 - 2018
- Created internal reporting pages for the support and sales organization
- Streamlined the bug triage process and cut average response time by 30%
- Supported database migrations and wrote regression checks for each release
- Collaborated with designers on accessible page layouts for mobile users
- Automated weekly data exports that the operations group relied on for planning

EDUCATION
B.S. Computer Science | State University | 2018
GPA: 3.7

SKILLS
Technical: JavaScript, Python, React, Node.js, AWS, Docker, Git, REST API, SQL
Methods: Agile, Scrum, code review, continuous delivery, automated testing
Soft: Leadership, Communication, Problem Solving, Team Collaboration, Adaptability, Time Management, Critical Thinking
Proficiency: Advanced in Python and JavaScript, intermediate in Node.js

ACHIEVEMENTS
- Engineering Excellence Award, TechCorp Inc, 2022
- Speaker at a regional JavaScript conference with 500+ attendees
- Open source maintainer of a caching library with 2,000 stars on GitHub
- Recognized as a top reviewer for 3 years in a row by the engineering group
"""

WEAK_RESUME = """
Jane Smith
jane.smith@email.com

EXPERIENCE
Worked at Company A
Did various tasks related to software development

Worked at Company B
Responsible for coding and testing

EDUCATION
Bachelor's Degree in Computer Science

SKILLS
coding, testing, development
"""

FRONTEND_RESUME = """Alex Rivera
alex.rivera@email.com | (555) 987-6543

SUMMARY
Frontend engineer focused on JavaScript, TypeScript and React.

EXPERIENCE
Frontend Engineer | WebWorks Inc | 2019 - Present
- Built React and TypeScript interfaces backed by Node.js services
- Improved bundle size by 30%

SKILLS
JavaScript, TypeScript, React, Node.js, HTML, CSS
"""

FRONTEND_JOB = """Senior Frontend Engineer

Requirements:
- JavaScript/TypeScript, React, Node.js, AWS, Docker, Kubernetes
"""


@pytest.fixture
def strong_resume() -> str:
    return STRONG_RESUME


@pytest.fixture
def weak_resume() -> str:
    return WEAK_RESUME


@pytest.fixture
def frontend_resume() -> str:
    return FRONTEND_RESUME


@pytest.fixture
def frontend_job() -> str:
    return FRONTEND_JOB
