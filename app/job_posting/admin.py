from django.contrib import admin, messages
from job_posting.models import CustomScreeningQuestion, JobPosting, SystemScreeningAnswer
from job_posting.tasks import sweep_expired_job_postings


@admin.action(description="만료 공고 정리(sweep) 실행")
def action_sweep_expired(modeladmin, request, queryset):
    sweep_expired_job_postings.delay()
    modeladmin.message_user(
        request,
        "만료 공고 정리 작업을 큐에 등록했습니다.",
        level=messages.SUCCESS,
    )


class SystemScreeningAnswerInline(admin.TabularInline):
    model = SystemScreeningAnswer
    extra = 0


class CustomScreeningQuestionInline(admin.TabularInline):
    model = CustomScreeningQuestion
    extra = 0


@admin.register(JobPosting)
class JobPostingAdmin(admin.ModelAdmin):
    list_display = ("id", "job_title", "company_name", "status", "owner", "created_at")
    list_filter = ("status", "experience_level")
    search_fields = ("job_title", "company_name")
    # 상태는 lifecycle 유스케이스로만 변경
    readonly_fields = ("status",)
    inlines = [SystemScreeningAnswerInline, CustomScreeningQuestionInline]
    actions = [action_sweep_expired]
