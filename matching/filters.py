"""
Job filter predicates.

Filters are tagged variants rather than free-form dictionaries: each kind
knows how to test a single JobPosting field. Role-conditional visibility
(what a seeker versus an employer may see) is expressed with the same
callable shape so the feed never hardcodes it.
"""

from enum import Enum
from typing import Annotated, Any, Callable, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import EmploymentType, JobPosting, JobStatus

JobPredicate = Callable[[JobPosting], bool]

NUMERIC_JOB_FIELDS = frozenset(
    {"salary_min", "salary_max", "experience_required_min", "experience_required_max"}
)


def _job_value(job: JobPosting, field: str) -> Any:
    value = getattr(job, field)
    if isinstance(value, Enum):
        return value.value
    return value


class _FieldFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str

    @field_validator("field")
    @classmethod
    def _known_field(cls, value: str) -> str:
        if value not in JobPosting.model_fields:
            raise ValueError(f"Unknown job field: {value}")
        return value


class TextContains(_FieldFilter):
    """Case-insensitive substring match on a text field."""

    kind: Literal["text_contains"] = "text_contains"
    value: str

    def matches(self, job: JobPosting) -> bool:
        actual = _job_value(job, self.field)
        if actual is None:
            return False
        return self.value.strip().lower() in str(actual).lower()


class Equals(_FieldFilter):
    kind: Literal["equals"] = "equals"
    value: Union[str, int, float, bool]

    def matches(self, job: JobPosting) -> bool:
        return _job_value(job, self.field) == self.value


class Range(_FieldFilter):
    """Inclusive numeric range. A job without a value never matches."""

    kind: Literal["range"] = "range"
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    @field_validator("field")
    @classmethod
    def _numeric_field(cls, value: str) -> str:
        if value not in NUMERIC_JOB_FIELDS:
            raise ValueError(f"Range filters need a numeric job field, got {value}")
        return value

    def matches(self, job: JobPosting) -> bool:
        actual = _job_value(job, self.field)
        if actual is None:
            return False
        if self.minimum is not None and actual < self.minimum:
            return False
        if self.maximum is not None and actual > self.maximum:
            return False
        return True


class Flag(_FieldFilter):
    kind: Literal["flag"] = "flag"
    value: bool = True

    def matches(self, job: JobPosting) -> bool:
        return bool(_job_value(job, self.field)) is self.value


JobFilter = Annotated[
    Union[TextContains, Equals, Range, Flag], Field(discriminator="kind")
]


def matches_all(job: JobPosting, filters: Sequence[JobFilter]) -> bool:
    return all(f.matches(job) for f in filters)


def filters_from_query(
    location: Optional[str] = None,
    employment_type: Optional[EmploymentType] = None,
    salary_min: Optional[int] = None,
    remote_only: bool = False,
    category: Optional[str] = None,
    experience_min: Optional[float] = None,
    experience_max: Optional[float] = None,
) -> List[JobFilter]:
    """
    Build filter predicates from the job search form fields.

    Args:
        location: Substring of the job location
        employment_type: Exact employment type
        salary_min: Lower bound on the posted minimum salary
        remote_only: Only remote jobs when True
        category: Exact job category
        experience_min: Lower bound on the required minimum experience
        experience_max: Upper bound on the required maximum experience

    Returns:
        List of filters; empty when no field is set
    """
    filters: List[JobFilter] = []

    if location and location.strip():
        filters.append(TextContains(field="location", value=location.strip()))

    if employment_type:
        filters.append(
            Equals(field="employment_type", value=EmploymentType(employment_type).value)
        )

    if salary_min is not None:
        filters.append(Range(field="salary_min", minimum=salary_min))

    if remote_only:
        filters.append(Flag(field="is_remote", value=True))

    if category and category.strip():
        filters.append(Equals(field="category", value=category.strip()))

    if experience_min is not None:
        filters.append(Range(field="experience_required_min", minimum=experience_min))

    if experience_max is not None:
        filters.append(Range(field="experience_required_max", maximum=experience_max))

    return filters


def seeker_visibility(job: JobPosting) -> bool:
    """Seekers only see active postings."""
    return job.status == JobStatus.ACTIVE


EMPLOYER_VISIBLE_STATUSES = frozenset(
    {JobStatus.ACTIVE, JobStatus.PENDING_APPROVAL, JobStatus.DRAFT}
)


def employer_visibility(employer_id: str) -> JobPredicate:
    """Employers see their own active, pending and draft postings."""

    def predicate(job: JobPosting) -> bool:
        return job.employer_id == employer_id and job.status in EMPLOYER_VISIBLE_STATUSES

    return predicate
