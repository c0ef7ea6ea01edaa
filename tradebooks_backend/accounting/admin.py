# accounting/admin.py

from django.contrib import admin

from accounting.models import Account, JournalEntry, JournalEntryLine

# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "account_type",
        "company",
        "current_balance",
        "is_active",
    )
    list_filter = ("account_type", "is_active", "company")
    search_fields = ("code", "name")
    ordering = ("company", "code")
    # balance is engine-managed
    readonly_fields = ("current_balance", "created_at", "updated_at")

    fieldsets = (
        (
            "Account Identity",
            {
                "fields": ("company", "code", "name", "account_type"),
            },
        ),
        (
            "Status",
            {
                "fields": ("is_active", "current_balance"),
            },
        ),
        (
            "System Fields",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )


# ============================================================
# JOURNAL ENTRY + LINES (STRICTLY IMMUTABLE)
# ============================================================


class JournalEntryLineInline(admin.TabularInline):
    model = JournalEntryLine
    extra = 0
    can_delete = False
    fields = (
        "line_number",
        "debit_account",
        "debit_amount",
        "credit_account",
        "credit_amount",
        "memo",
    )
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(JournalEntry)
class JournalEntryAdmin(admin.ModelAdmin):
    list_display = (
        "reference_number",
        "company",
        "entry_type",
        "entry_date",
        "total_debit",
        "total_credit",
        "created_at",
    )
    list_filter = ("entry_type", "entry_date", "company")
    search_fields = ("reference_number", "description")
    ordering = ("-entry_date", "-created_at")
    inlines = (JournalEntryLineInline,)

    readonly_fields = (
        "company",
        "reference_number",
        "entry_type",
        "entry_date",
        "description",
        "total_debit",
        "total_credit",
        "created_by",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
