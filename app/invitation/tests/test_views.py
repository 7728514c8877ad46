from datetime import timedelta

import pytest
from django.utils import timezone
from invitation.models import CandidateInvitation, ScreeningResponse
from job_posting.models import CustomScreeningQuestion, SystemScreeningAnswer
from rest_framework import status
from rest_framework.test import APIClient


@pytest.fixture
def posting_with_questions(make_job_posting):
    posting = make_job_posting(status="PUBLISHED")
    SystemScreeningAnswer.objects.create(
        job_posting=posting,
        question_id="english_proficiency",
        requirement="must-have",
        selected_answers=["Native or bilingual proficiency"],
    )
    question = CustomScreeningQuestion.objects.create(
        job_posting=posting,
        question_text="Can you work onsite?",
        answer_type="yes-no",
        must_answer=True,
    )
    return posting, question


def _responses(custom_question_id, onsite=True):
    return [
        {
            "question_type": "system",
            "question_id": "english_proficiency",
            "answer_type": "single",
            "answer": "Full professional proficiency",
        },
        {
            "question_type": "custom",
            "question_id": str(custom_question_id),
            "answer_type": "yes-no",
            "answer": onsite,
        },
    ]


@pytest.mark.django_db
class TestJobPostingInvitationsView:
    def setup_method(self):
        self.client = APIClient()

    def test_send_invitations(self, posting_with_questions, make_user, settings):
        settings.INVITATION_LINK_BASE_URL = "https://jobs.example.com/"
        posting, _ = posting_with_questions
        candidate = make_user("candidate")
        self.client.force_authenticate(user=posting.owner)

        resp = self.client.post(
            f"/api/v1/job-postings/{posting.id}/invitations/",
            {"candidate_ids": [candidate.id, 987654], "message": "Hello"},
            format="json",
        )

        assert resp.status_code == status.HTTP_201_CREATED
        assert resp.data["total_sent"] == 1
        assert resp.data["skipped_candidate_ids"] == [987654]
        assert resp.data["questions_count"] == {"system": 1, "custom": 1}
        invitation = CandidateInvitation.objects.get(job_posting=posting)
        assert invitation.candidate_email == "candidate@example.com"
        assert invitation.status == CandidateInvitation.Status.PENDING
        assert resp.data["invitations"][0]["invite_link"] == (
            f"https://jobs.example.com/invite/{invitation.token}"
        )
        validity = invitation.expires_at - invitation.sent_at
        assert validity == timedelta(days=settings.INVITATION_DEFAULT_VALIDITY_DAYS)

    def test_send_without_questions_returns_400(self, make_job_posting, make_user):
        posting = make_job_posting(status="PUBLISHED")
        candidate = make_user()
        self.client.force_authenticate(user=posting.owner)

        resp = self.client.post(
            f"/api/v1/job-postings/{posting.id}/invitations/",
            {"candidate_ids": [candidate.id]},
            format="json",
        )

        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["error_code"] == "VALIDATION_ERROR"

    def test_send_by_other_user_returns_403(self, posting_with_questions, make_user):
        posting, _ = posting_with_questions
        candidate = make_user()
        self.client.force_authenticate(user=make_user())

        resp = self.client.post(
            f"/api/v1/job-postings/{posting.id}/invitations/",
            {"candidate_ids": [candidate.id]},
            format="json",
        )

        assert resp.status_code == status.HTTP_403_FORBIDDEN
        assert not CandidateInvitation.objects.exists()

    def test_list_invitations_with_stats(self, posting_with_questions, make_user):
        posting, _ = posting_with_questions
        now = timezone.now()
        for i, state in enumerate(["PENDING", "VIEWED", "COMPLETED"]):
            CandidateInvitation.objects.create(
                job_posting=posting,
                candidate=make_user(),
                status=state,
                sent_at=now - timedelta(days=i),
                expires_at=now + timedelta(days=7),
            )
        CandidateInvitation.objects.create(
            job_posting=posting,
            candidate=make_user(),
            status="PENDING",
            sent_at=now - timedelta(days=10),
            expires_at=now - timedelta(days=3),
        )
        self.client.force_authenticate(user=posting.owner)

        resp = self.client.get(f"/api/v1/job-postings/{posting.id}/invitations/")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["stats"] == {
            "total": 4,
            "pending": 2,
            "viewed": 1,
            "completed": 1,
            "expired": 1,
        }
        assert len(resp.data["invitations"]) == 4


@pytest.mark.django_db
class TestInvitationByTokenView:
    def setup_method(self):
        self.client = APIClient()

    def _invite(self, posting, candidate, expires_in=timedelta(days=7), **fields):
        now = timezone.now()
        return CandidateInvitation.objects.create(
            job_posting=posting,
            candidate=candidate,
            sent_at=now,
            expires_at=now + expires_in,
            **fields,
        )

    def test_resolve_marks_viewed(self, posting_with_questions, make_user):
        posting, question = posting_with_questions
        invitation = self._invite(posting, make_user())

        resp = self.client.get(f"/api/v1/invitations/{invitation.token}/")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["invitation"]["status"] == "VIEWED"
        assert resp.data["job_posting"]["job_title"] == posting.job_title
        assert resp.data["questions"]["total"] == 2
        assert resp.data["questions"]["system"][0]["requirement"] == "must-have"
        assert "expected_answers" not in resp.data["questions"]["system"][0]
        assert resp.data["questions"]["custom"][0]["question_id"] == str(question.id)
        invitation.refresh_from_db()
        assert invitation.status == CandidateInvitation.Status.VIEWED
        assert invitation.viewed_at is not None

    def test_unknown_token_returns_404(self):
        resp = self.client.get("/api/v1/invitations/does-not-exist/")

        assert resp.status_code == status.HTTP_404_NOT_FOUND

    def test_expired_invitation_returns_410(self, posting_with_questions, make_user):
        posting, _ = posting_with_questions
        invitation = self._invite(posting, make_user(), expires_in=timedelta(hours=-1))

        resp = self.client.get(f"/api/v1/invitations/{invitation.token}/")

        assert resp.status_code == status.HTTP_410_GONE
        assert resp.data["error_code"] == "EXPIRED"
        assert resp.data["details"]["status"] == "EXPIRED"
        invitation.refresh_from_db()
        assert invitation.status == CandidateInvitation.Status.EXPIRED

    def test_submit_replaces_previous_responses(self, posting_with_questions, make_user):
        posting, question = posting_with_questions
        invitation = self._invite(posting, make_user())
        url = f"/api/v1/invitations/{invitation.token}/"

        first = self.client.post(url, {"responses": _responses(question.id)}, format="json")
        second = self.client.post(
            url, {"responses": _responses(question.id, onsite=False)[1:]}, format="json"
        )

        assert first.status_code == status.HTTP_200_OK
        assert first.data["response_count"] == 2
        assert second.status_code == status.HTTP_200_OK
        assert second.data["status"] == "COMPLETED"
        stored = ScreeningResponse.objects.filter(invitation=invitation)
        assert stored.count() == 1
        assert stored.get().answer is False
        assert stored.get().question_text == "Can you work onsite?"
        invitation.refresh_from_db()
        assert invitation.status == CandidateInvitation.Status.COMPLETED
        assert invitation.responded_at is not None

    def test_submit_when_resubmission_disabled_returns_400(
        self, posting_with_questions, make_user, settings
    ):
        settings.INVITATION_ALLOW_RESUBMISSION = False
        posting, question = posting_with_questions
        invitation = self._invite(posting, make_user(), status="COMPLETED")

        resp = self.client.post(
            f"/api/v1/invitations/{invitation.token}/",
            {"responses": _responses(question.id)},
            format="json",
        )

        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["error_code"] == "STATE_CONFLICT"
        assert not ScreeningResponse.objects.exists()

    def test_submit_after_expiry_returns_410(self, posting_with_questions, make_user):
        posting, question = posting_with_questions
        invitation = self._invite(posting, make_user(), expires_in=timedelta(seconds=-1))

        resp = self.client.post(
            f"/api/v1/invitations/{invitation.token}/",
            {"responses": _responses(question.id)},
            format="json",
        )

        assert resp.status_code == status.HTTP_410_GONE
        invitation.refresh_from_db()
        assert invitation.status == CandidateInvitation.Status.EXPIRED

    def test_submit_invalid_answer_returns_400(self, posting_with_questions, make_user):
        posting, question = posting_with_questions
        invitation = self._invite(posting, make_user())
        responses = _responses(question.id)
        responses[1]["answer"] = "maybe"

        resp = self.client.post(
            f"/api/v1/invitations/{invitation.token}/",
            {"responses": responses},
            format="json",
        )

        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["error_code"] == "VALIDATION_ERROR"
        invitation.refresh_from_db()
        assert invitation.status == CandidateInvitation.Status.PENDING
