from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class JobPostingDomain:
    id: int
    owner_user_id: int
    status: str
    job_title: str
    company_name: str
    experience_level: str
    country_region: str = ""
    work_type: str = ""
