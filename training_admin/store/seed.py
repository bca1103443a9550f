"""Demo data used when no state document exists yet.

Timestamps are given as hour offsets from the reference time so the demo
always looks recent.
"""

from datetime import datetime, timedelta
from typing import Any

from training_admin.store.state import TrainingState
from training_admin.utils import utc_now


MODULE_SOFT = "module-soft-communications"
MODULE_POSH = "module-posh-basics"
MODULE_SALES = "module-sales-excellence"
MODULE_CRM = "module-crm-mastery"
MODULE_DIGITAL = "module-digital-marketing"
MODULE_LEADERSHIP = "module-leadership-essentials"
MODULE_CYBER = "module-cybersecurity-101"
MODULE_DEI = "module-dei-foundations"
MODULE_TIME = "module-time-management"
MODULE_NEGOTIATION = "module-advanced-negotiation"
MODULE_PRIVACY = "module-data-privacy"

EMPLOYEE_CXO = "employee-cxo-01"
EMPLOYEE_DIRECTOR = "employee-director-01"
EMPLOYEE_MANAGER = "employee-manager-01"
EMPLOYEE_SR_EXEC = "employee-sr-exec-01"
EMPLOYEE_EXEC = "employee-exec-01"
EMPLOYEE_IT = "employee-it-01"
EMPLOYEE_FINANCE = "employee-finance-01"
EMPLOYEE_LEGAL = "employee-legal-01"
EMPLOYEE_PRODUCT = "employee-product-01"
EMPLOYEE_ENGINEER = "employee-engineer-01"
EMPLOYEE_HR2 = "employee-hr-02"
EMPLOYEE_OPS2 = "employee-ops-02"
EMPLOYEE_SALES2 = "employee-sales-02"

BATCH_LEADERSHIP = "batch-leadership-2024"
BATCH_SALES = "batch-sales-2024"
BATCH_ONBOARDING = "batch-onboarding-may"
BATCH_SALES_Q2 = "batch-sales-q2"
BATCH_COMPLIANCE = "batch-compliance-summer"


# id, module_name, designations, sub_module_title, content_type, file_name,
# slides_url, has_test, age (hours)
_MODULES = [
    (MODULE_SOFT, "Soft Communications", ["Manager"],
     "Executive Presence and Leadership Communication", "pdf",
     "leadership-communication.pdf", "", True, 120),
    (MODULE_POSH, "POSH", ["Executive"], "Workplace Sensitivity Essentials",
     "ppt", "posh-basics.pptx", "", True, 90),
    (MODULE_SALES, "Sales Excellence", ["Senior Executive"],
     "Negotiation Frameworks", "pdf", "negotiation-frameworks.pdf", "", False, 60),
    (MODULE_CRM, "CRM Mastery", ["Executive"], "Pipeline Hygiene Basics", "pdf",
     "pipeline-hygiene.pdf", "", False, 30),
    (MODULE_DIGITAL, "Digital Marketing", ["Manager"], "Growth Reporting Playbook",
     "pdf", "growth-reporting.pdf", "", True, 15),
    (MODULE_LEADERSHIP, "Leadership Essentials", ["CXO", "Director"],
     "Decision Making Under Uncertainty", "pdf", "decision-making.pdf",
     "slides/leadership-decision.pptx", True, 25),
    (MODULE_CYBER, "Cybersecurity 101", ["Executive", "Senior Executive"],
     "Phishing Awareness and Response", "pdf", "phishing-awareness.pdf",
     "slides/cybersecurity-101.pptx", True, 22),
    (MODULE_DEI, "DEI Foundations", ["Manager", "Executive"],
     "Inclusive Communication Practices", "doc", "inclusive-communication.docx",
     "", False, 20),
    (MODULE_TIME, "Time Management", ["Executive"], "Prioritization Frameworks",
     "pdf", "prioritization-frameworks.pdf", "", False, 18),
    (MODULE_NEGOTIATION, "Advanced Negotiation", ["Director", "Manager"],
     "Multi-Party Negotiation Strategies", "ppt", "multi-party-negotiation.pptx",
     "slides/advanced-negotiation.pptx", True, 16),
    (MODULE_PRIVACY, "Data Privacy", ["CXO", "Director", "Manager"],
     "GDPR and CCPA Overview", "pdf", "data-privacy-basics.pdf", "", True, 14),
]

_ASSESSMENTS: list[dict[str, Any]] = [
    {
        "id": "test-soft-communications",
        "module_id": MODULE_SOFT,
        "title": "Leadership Communication Quiz",
        "description": "Assess executive presence and leadership communication skills",
        "passing_score": 70,
        "duration_minutes": 15,
        "questions": [
            {
                "id": "q1",
                "question": "What framework helps structure leadership messaging?",
                "options": ["SOAP", "STAR", "AIDA", "PEST"],
                "answer": 1,
            },
            {
                "id": "q2",
                "question": "What is the recommended length for executive updates?",
                "options": ["30 minutes", "15 minutes", "10 minutes", "20 minutes"],
                "answer": 2,
            },
        ],
    },
    {
        "id": "test-posh",
        "module_id": MODULE_POSH,
        "title": "POSH Compliance Check",
        "description": "Key concepts from the Workplace Sensitivity module",
        "passing_score": 80,
        "duration_minutes": 20,
        "questions": [
            {
                "id": "q1",
                "question": "How many members must a POSH committee have?",
                "options": ["At least 2", "At least 4", "Exactly 4", "At least 3"],
                "answer": 1,
            },
        ],
    },
    {
        "id": "test-digital",
        "module_id": MODULE_DIGITAL,
        "title": "Growth Reporting Assessment",
        "description": "Evaluate understanding of marketing growth metrics",
        "passing_score": 75,
        "duration_minutes": 25,
        "questions": [
            {
                "id": "q1",
                "question": "Which metric best measures campaign efficiency?",
                "options": ["CTR", "CPA", "Impressions", "Reach"],
                "answer": 1,
            },
        ],
    },
    {
        "id": "test-leadership",
        "module_id": MODULE_LEADERSHIP,
        "title": "Leadership Under Pressure",
        "description": "Evaluate judgement and prioritization under uncertainty",
        "passing_score": 70,
        "duration_minutes": 20,
        "questions": [
            {
                "id": "q1",
                "question": "Best first step in a crisis?",
                "options": ["Pause", "React", "Delegate", "Ignore"],
                "answer": 0,
            },
        ],
    },
    {
        "id": "test-cyber",
        "module_id": MODULE_CYBER,
        "title": "Cyber Hygiene Basics",
        "description": "Identify phishing and social engineering",
        "passing_score": 80,
        "duration_minutes": 15,
        "questions": [
            {
                "id": "q1",
                "question": "Which is a phishing red flag?",
                "options": ["Generic greeting", "HTTPS link", "Known sender", "None"],
                "answer": 0,
            },
        ],
    },
    {
        "id": "test-privacy",
        "module_id": MODULE_PRIVACY,
        "title": "Privacy Readiness",
        "description": "Core privacy frameworks and rights",
        "passing_score": 75,
        "duration_minutes": 25,
        "questions": [
            {
                "id": "q1",
                "question": "Data subject rights include?",
                "options": ["Erasure", "Profit", "Ownership", "Liability"],
                "answer": 0,
            },
        ],
    },
]

# id, HR code, name, designation, department, date_of_joining, location,
# is_active, created (hours ago), updated (hours ago)
_EMPLOYEES = [
    (EMPLOYEE_CXO, "EMP001", "Jordan Blake", "CXO", "Executive", "2022-01-10",
     "New York", True, 210, 210),
    (EMPLOYEE_DIRECTOR, "EMP002", "Priya Mehta", "Director", "Operations",
     "2022-05-12", "Chicago", True, 190, 190),
    (EMPLOYEE_MANAGER, "EMP003", "Marcus Lee", "Manager", "Sales", "2023-02-18",
     "San Francisco", True, 150, 150),
    (EMPLOYEE_SR_EXEC, "EMP004", "Elena Rodriguez", "Senior Executive",
     "Marketing", "2023-07-04", "Austin", True, 90, 90),
    (EMPLOYEE_EXEC, "EMP005", "Devon Carter", "Executive", "Customer Success",
     "2024-01-15", "Seattle", True, 45, 45),
    (EMPLOYEE_IT, "EMP006", "Sam Patel", "Executive", "IT", "2024-02-10",
     "Boston", True, 120, 110),
    (EMPLOYEE_FINANCE, "EMP007", "Nina Alvarez", "Senior Executive", "Finance",
     "2023-11-01", "Miami", True, 100, 100),
    (EMPLOYEE_LEGAL, "EMP008", "Victor Huang", "Director", "Legal", "2021-08-15",
     "Los Angeles", True, 300, 200),
    (EMPLOYEE_PRODUCT, "EMP009", "Aisha Khan", "Manager", "Product", "2022-09-07",
     "Denver", True, 180, 160),
    (EMPLOYEE_ENGINEER, "EMP010", "Diego Silva", "Executive", "Engineering",
     "2024-03-12", "Austin", True, 80, 80),
    (EMPLOYEE_HR2, "EMP011", "Chloe Martin", "Executive", "HR", "2020-04-22",
     "Seattle", False, 600, 500),
    (EMPLOYEE_OPS2, "EMP012", "Liam O’Connor", "Manager", "Operations",
     "2021-03-03", "Dublin", True, 500, 400),
    (EMPLOYEE_SALES2, "EMP013", "Emily Rogers", "Senior Executive", "Sales",
     "2022-12-19", "Chicago", True, 140, 120),
]

# id, title, description, is_published, created, updated, published (hours ago)
_BATCHES = [
    (BATCH_LEADERSHIP, "Q1 Leadership Immersion",
     "Cross-functional leadership fundamentals for new managers", True, 80, 60, 60),
    (BATCH_SALES, "Sales Mastery Spring Cohort",
     "Negotiation and CRM workflows for sales teams", False, 40, 30, None),
    (BATCH_ONBOARDING, "May Onboarding Cohort",
     "Orientation and foundations for new hires", True, 28, 27, 27),
    (BATCH_SALES_Q2, "Q2 Sales Accelerator",
     "Negotiation and time management toolkit", True, 26, 24, 24),
    (BATCH_COMPLIANCE, "Summer Compliance Wave",
     "Privacy, security, and workplace safety", False, 23, 23, None),
]

# batch, employee, enrolled (hours ago)
_ENROLLMENTS = [
    (BATCH_LEADERSHIP, EMPLOYEE_MANAGER, 70),
    (BATCH_LEADERSHIP, EMPLOYEE_SR_EXEC, 70),
    (BATCH_SALES, EMPLOYEE_EXEC, 35),
    (BATCH_ONBOARDING, EMPLOYEE_IT, 27),
    (BATCH_ONBOARDING, EMPLOYEE_ENGINEER, 27),
    (BATCH_ONBOARDING, EMPLOYEE_PRODUCT, 27),
    (BATCH_SALES_Q2, EMPLOYEE_SALES2, 24),
    (BATCH_SALES_Q2, EMPLOYEE_MANAGER, 24),
    (BATCH_COMPLIANCE, EMPLOYEE_FINANCE, 22),
    (BATCH_COMPLIANCE, EMPLOYEE_LEGAL, 22),
    (BATCH_COMPLIANCE, EMPLOYEE_DIRECTOR, 22),
]

# batch, module, order_index, assigned (hours ago)
_BATCH_MODULES = [
    (BATCH_LEADERSHIP, MODULE_SOFT, 0, 70),
    (BATCH_LEADERSHIP, MODULE_DIGITAL, 1, 68),
    (BATCH_SALES, MODULE_SALES, 0, 35),
    (BATCH_SALES, MODULE_CRM, 1, 32),
    (BATCH_ONBOARDING, MODULE_DEI, 0, 27),
    (BATCH_ONBOARDING, MODULE_TIME, 1, 27),
    (BATCH_SALES_Q2, MODULE_NEGOTIATION, 0, 24),
    (BATCH_SALES_Q2, MODULE_SALES, 1, 24),
    (BATCH_COMPLIANCE, MODULE_PRIVACY, 0, 22),
    (BATCH_COMPLIANCE, MODULE_CYBER, 1, 22),
]

# employee, batch, module, status, progress, test_status, score,
# started, completed, last accessed (hours ago)
_PROGRESS = [
    (EMPLOYEE_MANAGER, BATCH_LEADERSHIP, MODULE_SOFT, "completed", 100,
     "completed", 85, 65, 62, 62),
    (EMPLOYEE_MANAGER, BATCH_LEADERSHIP, MODULE_DIGITAL, "in_progress", 60,
     "scheduled", None, 61, None, 1),
    (EMPLOYEE_SR_EXEC, BATCH_LEADERSHIP, MODULE_SOFT, "in_progress", 40,
     "scheduled", None, 64, None, 2),
    (EMPLOYEE_EXEC, BATCH_SALES, MODULE_SALES, "not_started", 0,
     "not_taken", None, None, None, None),
    (EMPLOYEE_EXEC, BATCH_SALES, MODULE_CRM, "not_started", 0,
     "not_taken", None, None, None, None),
    (EMPLOYEE_IT, BATCH_ONBOARDING, MODULE_DEI, "completed", 100,
     "not_taken", None, 27, 26, 26),
    (EMPLOYEE_ENGINEER, BATCH_ONBOARDING, MODULE_TIME, "in_progress", 35,
     "not_taken", None, 26, None, 1),
    (EMPLOYEE_SALES2, BATCH_SALES_Q2, MODULE_NEGOTIATION, "completed", 100,
     "completed", 92, 24, 23, 23),
    (EMPLOYEE_MANAGER, BATCH_SALES_Q2, MODULE_NEGOTIATION, "in_progress", 55,
     "scheduled", None, 24, None, 3),
    (EMPLOYEE_MANAGER, BATCH_SALES_Q2, MODULE_SALES, "not_started", 0,
     "not_taken", None, None, None, None),
    (EMPLOYEE_FINANCE, BATCH_COMPLIANCE, MODULE_PRIVACY, "in_progress", 20,
     "not_taken", None, 21, None, 2),
    (EMPLOYEE_LEGAL, BATCH_COMPLIANCE, MODULE_PRIVACY, "completed", 100,
     "completed", 88, 22, 21, 21),
    (EMPLOYEE_DIRECTOR, BATCH_COMPLIANCE, MODULE_CYBER, "not_started", 0,
     "not_taken", None, None, None, None),
]

# batch, employee, module, assigned, due, submitted (hours relative to now;
# due may lie in the future), status, test_status, notes
_ASSIGNMENTS = [
    (BATCH_LEADERSHIP, EMPLOYEE_MANAGER, MODULE_SOFT, -20, -14, -15, "reviewed",
     "completed",
     "Delivered leadership reflection deck and received coaching feedback."),
    (BATCH_LEADERSHIP, EMPLOYEE_SR_EXEC, MODULE_DIGITAL, -12, -5, None,
     "submitted", "scheduled",
     "Awaiting analytics deep-dive presentation recording."),
    (BATCH_SALES, EMPLOYEE_EXEC, MODULE_CRM, -8, 3, None, "pending", "not_taken",
     "Prepare CRM pipeline clean-up checklist after module completion."),
    (BATCH_ONBOARDING, EMPLOYEE_IT, MODULE_DEI, -27, -25, -26, "reviewed",
     "not_taken", "Great examples shared; action plan noted."),
    (BATCH_SALES_Q2, EMPLOYEE_SALES2, MODULE_NEGOTIATION, -24, -22, -23,
     "reviewed", "completed", "Applied frameworks to current pipeline successfully."),
    (BATCH_COMPLIANCE, EMPLOYEE_FINANCE, MODULE_PRIVACY, -22, -15, None,
     "pending", "not_taken", "Compile departmental data map for privacy readiness."),
]


def build_seed_document(now: datetime | None = None) -> dict[str, Any]:
    """Demo data as a state document."""
    now = now or utc_now()

    def at(offset_hours: float | None) -> str | None:
        if offset_hours is None:
            return None
        return (now + timedelta(hours=offset_hours)).isoformat()

    def ago(hours: float | None) -> str | None:
        return None if hours is None else at(-hours)

    return {
        "modules": [
            {
                "id": module_id,
                "module_name": name,
                "designations": designations,
                "sub_module_title": title,
                "content_url": "#",
                "content_type": content_type,
                "file_name": file_name,
                "slides_url": slides_url,
                "has_test": has_test,
                "is_active": True,
                "created_at": ago(age),
                "updated_at": ago(age),
            }
            for (module_id, name, designations, title, content_type, file_name,
                 slides_url, has_test, age) in _MODULES
        ],
        "assessments": [dict(a) for a in _ASSESSMENTS],
        "employees": [
            {
                "id": internal_id,
                "employee_id": code,
                "name": name,
                "phone_number": f"555-{1000 + index}",
                "email": _email_for(name),
                "designation": designation,
                "department": department,
                "date_of_joining": joined,
                "location": location,
                "is_active": active,
                "created_at": ago(created),
                "updated_at": ago(updated),
            }
            for index, (internal_id, code, name, designation, department, joined,
                        location, active, created, updated)
            in enumerate(_EMPLOYEES, start=1)
        ],
        "batches": [
            {
                "id": batch_id,
                "title": title,
                "description": description,
                "is_published": published,
                "is_active": True,
                "created_at": ago(created),
                "updated_at": ago(updated),
                "published_at": ago(published_hours),
            }
            for (batch_id, title, description, published, created, updated,
                 published_hours) in _BATCHES
        ],
        "batch_employees": [
            {
                "id": f"be-{index}",
                "batch_id": batch_id,
                "employee_id": employee_id,
                "enrolled_at": ago(enrolled),
            }
            for index, (batch_id, employee_id, enrolled)
            in enumerate(_ENROLLMENTS, start=1)
        ],
        "batch_modules": [
            {
                "id": f"bm-{index}",
                "batch_id": batch_id,
                "module_id": module_id,
                "order_index": order_index,
                "assigned_at": ago(assigned),
            }
            for index, (batch_id, module_id, order_index, assigned)
            in enumerate(_BATCH_MODULES, start=1)
        ],
        "employee_progress": [
            {
                "id": f"progress-{index}",
                "employee_id": employee_id,
                "batch_id": batch_id,
                "module_id": module_id,
                "status": status,
                "progress_percentage": progress,
                "test_status": test_status,
                "test_score": score,
                "started_at": ago(started),
                "completed_at": ago(completed),
                "last_accessed_at": ago(accessed),
            }
            for index, (employee_id, batch_id, module_id, status, progress,
                        test_status, score, started, completed, accessed)
            in enumerate(_PROGRESS, start=1)
        ],
        "post_session_assignments": [
            {
                "id": f"post-assignment-{index}",
                "batch_id": batch_id,
                "employee_id": employee_id,
                "module_id": module_id,
                "assigned_at": at(assigned),
                "due_date": at(due),
                "submitted_at": at(submitted),
                "status": status,
                "test_status": test_status,
                "notes": notes,
            }
            for index, (batch_id, employee_id, module_id, assigned, due, submitted,
                        status, test_status, notes)
            in enumerate(_ASSIGNMENTS, start=1)
        ],
    }


def build_seed_state(now: datetime | None = None) -> TrainingState:
    """Demo data as a live state."""
    return TrainingState.from_dict(build_seed_document(now))


def _email_for(name: str) -> str:
    local = name.lower().replace("’", "").replace(" ", ".")
    return f"{local}@example.com"
