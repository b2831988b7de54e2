"""Stampcard admin.

Cards are mutated only through the services (stamps, redemption); the admin
shows them read-only so the code reservation and event history stay
consistent.
"""

from django.contrib import admin
from django.utils.html import format_html

from stampcard.models import (
    Business,
    CodeReservation,
    CustomerCard,
    LoyaltyProgram,
    Profile,
    RewardEvent,
    StampActivity,
    StampEvent,
)


# ===========================================
# Profile / Business Admin
# ===========================================


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ["code", "display_name", "email", "user_type", "has_push_token", "is_active"]
    list_filter = ["user_type", "is_active"]
    search_fields = ["code", "display_name", "email"]
    readonly_fields = ["created_at"]

    def has_push_token(self, obj):
        return bool(obj.push_token)

    has_push_token.boolean = True
    has_push_token.short_description = "Push"


class LoyaltyProgramInline(admin.TabularInline):
    model = LoyaltyProgram
    extra = 0
    fields = ["total_slots", "reward_description", "is_active"]
    readonly_fields = ["total_slots"]
    show_change_link = True


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ["name", "owner", "program_count", "is_active", "created_at"]
    list_filter = ["is_active"]
    search_fields = ["name", "owner__code", "owner__display_name"]
    raw_id_fields = ["owner"]
    readonly_fields = ["created_at"]
    inlines = [LoyaltyProgramInline]

    def program_count(self, obj):
        return obj.programs.count()

    program_count.short_description = "Programs"


# ===========================================
# Program Admin
# ===========================================


@admin.register(LoyaltyProgram)
class LoyaltyProgramAdmin(admin.ModelAdmin):
    list_display = [
        "reward_description",
        "business",
        "total_slots",
        "color_swatch",
        "open_cards",
        "is_active",
        "created_at",
    ]
    list_filter = ["is_active", "stamp_shape"]
    search_fields = ["reward_description", "business__name"]
    raw_id_fields = ["business"]
    readonly_fields = ["created_at", "updated_at", "deactivated_at"]

    def color_swatch(self, obj):
        if not obj.card_color:
            return "-"
        return format_html(
            '<span style="background:{}; padding:2px 12px; border-radius:3px;"></span>',
            obj.card_color,
        )

    color_swatch.short_description = "Color"

    def open_cards(self, obj):
        return obj.cards.filter(reward_claimed=False).count()

    open_cards.short_description = "Open cards"


# ===========================================
# Card Admin
# ===========================================


class StampEventInline(admin.TabularInline):
    model = StampEvent
    extra = 0
    fields = ["created_at"]
    readonly_fields = ["created_at"]
    ordering = ["-created_at"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class RewardEventInline(admin.TabularInline):
    model = RewardEvent
    extra = 0
    fields = ["claimed_at", "is_redeemed", "note"]
    readonly_fields = ["claimed_at", "is_redeemed", "note"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(CustomerCard)
class CustomerCardAdmin(admin.ModelAdmin):
    list_display = [
        "code",
        "customer_name",
        "business",
        "stamps_progress",
        "status_badge",
        "last_stamp_at",
        "created_at",
    ]
    list_filter = ["reward_claimed", "business"]
    search_fields = ["code", "customer_name", "customer__code"]
    readonly_fields = [
        "customer",
        "program",
        "business",
        "code",
        "customer_name",
        "current_stamps",
        "reward_claimed",
        "reward_claimed_at",
        "created_at",
        "last_stamp_at",
    ]
    inlines = [StampEventInline, RewardEventInline]

    def has_add_permission(self, request):
        return False

    def stamps_progress(self, obj):
        return f"{obj.current_stamps}/{obj.program.total_slots}"

    stamps_progress.short_description = "Stamps"

    def status_badge(self, obj):
        if obj.reward_claimed:
            color, label = "#6c757d", "Redeemed"
        elif obj.current_stamps >= obj.program.total_slots:
            color, label = "#28a745", "Complete"
        else:
            color, label = "#17a2b8", "Open"
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:3px; font-size:11px;">{}</span>',
            color,
            label,
        )

    status_badge.short_description = "Status"


@admin.register(CodeReservation)
class CodeReservationAdmin(admin.ModelAdmin):
    list_display = ["code", "business", "customer", "card", "created_at"]
    search_fields = ["code", "business__name", "customer__code"]
    list_filter = ["business"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(StampActivity)
class StampActivityAdmin(admin.ModelAdmin):
    list_display = ["created_at", "customer_name", "business_name", "stamp_count", "note"]
    search_fields = ["customer_name", "business_name", "note"]
    readonly_fields = [
        "card",
        "customer",
        "business",
        "program",
        "stamp_count",
        "customer_name",
        "business_name",
        "note",
        "created_at",
    ]
    date_hierarchy = "created_at"

    def has_add_permission(self, request):
        return False
