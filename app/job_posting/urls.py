from django.urls import path
from job_posting.views import (
    ArchiveJobPostingView,
    JobPostingExpiryView,
    PublishJobPostingView,
    RepublishJobPostingView,
    SweepExpiredJobPostingsCronView,
)

urlpatterns = [
    path(
        "job-postings/<int:job_posting_id>/publish/",
        PublishJobPostingView.as_view(),
        name="job_posting_publish",
    ),
    path(
        "job-postings/<int:job_posting_id>/archive/",
        ArchiveJobPostingView.as_view(),
        name="job_posting_archive",
    ),
    path(
        "job-postings/<int:job_posting_id>/republish/",
        RepublishJobPostingView.as_view(),
        name="job_posting_republish",
    ),
    path(
        "job-postings/<int:job_posting_id>/expiry/",
        JobPostingExpiryView.as_view(),
        name="job_posting_expiry",
    ),
    path(
        "cron/sweep-expired-job-postings/",
        SweepExpiredJobPostingsCronView.as_view(),
        name="cron_sweep_expired_job_postings",
    ),
]
