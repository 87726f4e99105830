"""Tests for feed assembly."""

from matching.feed import FeedBuilder
from matching.filters import employer_visibility, filters_from_query
from matching.models import JobStatus
from matching.scoring import MatchScoreCalculator

from .conftest import day


def _ids(feed):
    return [item.job.id for item in feed.items]


def test_basic_ranking(seeker_profile, job_a, job_b):
    feed = FeedBuilder().build_feed(seeker_profile, [job_b, job_a])

    assert _ids(feed) == ["job-a", "job-b"]
    assert [item.match_score for item in feed.items] == [100, 45]


def test_ties_broken_by_newest_first(seeker_profile, make_job):
    older = make_job("job-old", created_at=day(1))
    newer = make_job("job-new", created_at=day(2))

    feed = FeedBuilder().build_feed(seeker_profile, [older, newer])

    assert feed.items[0].match_score == feed.items[1].match_score
    assert _ids(feed) == ["job-new", "job-old"]


def test_full_ties_ordered_by_id(seeker_profile, make_job):
    jobs = [make_job(job_id, created_at=day(1)) for job_id in ("c", "a", "b")]

    feed = FeedBuilder().build_feed(seeker_profile, jobs)

    assert _ids(feed) == ["a", "b", "c"]


def test_decided_jobs_never_appear(seeker_profile, job_a, job_b, make_job):
    jobs = [job_a, job_b, make_job("job-c")]

    feed = FeedBuilder().build_feed(seeker_profile, jobs, decided={"job-a", "job-c"})

    assert _ids(feed) == ["job-b"]
    assert feed.total_count == 3
    assert feed.eligible_count == 3


def test_saved_jobs_are_annotated_not_excluded(seeker_profile, job_a, job_b):
    feed = FeedBuilder().build_feed(seeker_profile, [job_a, job_b], saved_set={"job-b"})

    assert _ids(feed) == ["job-a", "job-b"]
    assert [item.is_saved for item in feed.items] == [False, True]


def test_only_active_jobs_by_default(seeker_profile, make_job):
    jobs = [
        make_job("active", status=JobStatus.ACTIVE),
        make_job("draft", status=JobStatus.DRAFT),
        make_job("pending", status=JobStatus.PENDING_APPROVAL),
        make_job("closed", status=JobStatus.CLOSED),
    ]

    feed = FeedBuilder().build_feed(seeker_profile, jobs)

    assert _ids(feed) == ["active"]
    assert feed.total_count == 4
    assert feed.eligible_count == 1


def test_employer_visibility_is_caller_supplied(make_job):
    jobs = [
        make_job("own-active", status=JobStatus.ACTIVE, created_at=day(1)),
        make_job("own-draft", status=JobStatus.DRAFT, created_at=day(3)),
        make_job("own-pending", status=JobStatus.PENDING_APPROVAL, created_at=day(2)),
        make_job("own-closed", status=JobStatus.CLOSED),
        make_job("other", employer_id="employer-2", status=JobStatus.ACTIVE),
    ]

    feed = FeedBuilder().build_feed(
        None, jobs, visibility=employer_visibility("employer-1")
    )

    assert _ids(feed) == ["own-draft", "own-pending", "own-active"]
    assert all(item.match_score is None for item in feed.items)


def test_empty_input_gives_empty_feed(seeker_profile):
    feed = FeedBuilder().build_feed(seeker_profile, [])

    assert feed.items == []
    assert feed.is_empty
    assert not feed.is_exhausted


def test_all_decided_is_exhausted_not_empty(seeker_profile, job_a, job_b):
    feed = FeedBuilder().build_feed(
        seeker_profile, [job_a, job_b], decided={"job-a", "job-b"}
    )

    assert feed.items == []
    assert feed.is_exhausted
    assert not feed.is_empty


def test_filters_are_applied(seeker_profile, job_a, job_b):
    filters = filters_from_query(remote_only=True)

    feed = FeedBuilder().build_feed(seeker_profile, [job_a, job_b], filters=filters)

    assert _ids(feed) == ["job-a"]
    assert feed.eligible_count == 1


def test_limit_truncates_after_sorting(seeker_profile, job_a, job_b):
    feed = FeedBuilder().build_feed(seeker_profile, [job_b, job_a], limit=1)

    assert _ids(feed) == ["job-a"]
    assert feed.eligible_count == 2


def test_custom_calculator_is_used(seeker_profile, make_job):
    job = make_job(experience_required_min=4, skills_required=set())
    strict = FeedBuilder(MatchScoreCalculator(experience_gap_years=0))
    lenient = FeedBuilder(MatchScoreCalculator(experience_gap_years=5))

    assert strict.build_feed(seeker_profile, [job]).items[0].match_score == 55
    assert lenient.build_feed(seeker_profile, [job]).items[0].match_score == 75
