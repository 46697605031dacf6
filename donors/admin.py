from django.contrib import admin

from algorithms.eligibility import next_eligible_date
from .models import Donor, Donation


@admin.register(Donor)
class DonorAdmin(admin.ModelAdmin):
    list_display   = ['donor_name', 'blood_group', 'pincode', 'city', 'status', 'consent_blood_requests',
                      'is_eligible', 'can_donate_display']
    list_filter    = ['blood_group', 'status', 'consent_blood_requests', 'is_eligible', 'state']
    search_fields  = ['donor_name', 'user__email', 'phone', 'pincode']
    ordering       = ['-registration_date']
    readonly_fields = ['registration_date', 'next_eligible_display', 'created_at', 'updated_at']

    fieldsets = (
        ('Personal Info', {
            'fields': ('user', 'donor_name', 'phone', 'blood_group', 'date_of_birth')
        }),
        ('Location', {
            'fields': ('pincode', 'city', 'district', 'state')
        }),
        ('Status', {
            'fields': ('status', 'consent_blood_requests', 'is_eligible',
                       'last_donation_date', 'next_eligible_display', 'registration_date')
        }),
        ('Health', {
            'fields': ('weight', 'height', 'medical_conditions', 'medications',
                       'emergency_contact', 'emergency_contact_phone'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(boolean=True, description='Can Donate Now')
    def can_donate_display(self, obj):
        return obj.can_donate

    @admin.display(description='Next Eligible')
    def next_eligible_display(self, obj):
        return next_eligible_date(obj.last_donation_date) or '-'

    actions = ['mark_ineligible', 'mark_eligible']

    @admin.action(description='Mark selected donors as medically ineligible')
    def mark_ineligible(self, request, queryset):
        updated = queryset.update(is_eligible=False)
        self.message_user(request, f'{updated} donor(s) marked ineligible.')

    @admin.action(description='Mark selected donors as eligible')
    def mark_eligible(self, request, queryset):
        updated = queryset.update(is_eligible=True)
        self.message_user(request, f'{updated} donor(s) marked eligible.')


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    list_display  = ['user', 'donor', 'blood_group', 'units', 'donation_date', 'blood_camp']
    list_filter   = ['blood_group', 'donation_date']
    search_fields = ['donor__donor_name', 'user__email', 'location']
    ordering      = ['-donation_date']
    readonly_fields = ['created_at']
