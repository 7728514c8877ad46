from django.urls import path
from invitation.views import InvitationByTokenView, JobPostingInvitationsView

urlpatterns = [
    path(
        "job-postings/<int:job_posting_id>/invitations/",
        JobPostingInvitationsView.as_view(),
        name="job_posting_invitations",
    ),
    path(
        "invitations/<str:token>/",
        InvitationByTokenView.as_view(),
        name="invitation_by_token",
    ),
]
