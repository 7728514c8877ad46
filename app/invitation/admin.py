from django.contrib import admin
from invitation.models import CandidateInvitation, ScreeningResponse


class ScreeningResponseInline(admin.TabularInline):
    model = ScreeningResponse
    extra = 0
    readonly_fields = ("question_type", "question_id", "answer_type", "answer", "extra")


@admin.register(CandidateInvitation)
class CandidateInvitationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "job_posting",
        "candidate_email",
        "status",
        "sent_at",
        "expires_at",
    )
    list_filter = ("status",)
    search_fields = ("candidate_email", "candidate_name")
    readonly_fields = ("token", "status", "viewed_at", "responded_at")
    inlines = [ScreeningResponseInline]
