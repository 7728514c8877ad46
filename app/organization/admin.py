from django.contrib import admin
from organization.models import Company, OrganizationMember


class OrganizationMemberInline(admin.TabularInline):
    model = OrganizationMember
    extra = 0


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("id", "company_name", "created_at")
    search_fields = ("company_name",)
    inlines = [OrganizationMemberInline]
