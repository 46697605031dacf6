from django.contrib import admin

from .models import BloodRequest


@admin.register(BloodRequest)
class BloodRequestAdmin(admin.ModelAdmin):
    list_display = ['patient_name', 'blood_group', 'units_needed', 'hospital_name',
                    'urgency_level', 'status', 'pincode', 'request_date', 'hours_waiting_display']
    list_filter = ['status', 'urgency_level', 'blood_group', 'state']
    search_fields = ['patient_name', 'hospital_name', 'contact_phone', 'pincode', 'user__email']
    ordering = ['-request_date']
    readonly_fields = ['request_date', 'created_at', 'updated_at']

    @admin.display(description='Hours Waiting')
    def hours_waiting_display(self, obj):
        return f"{obj.hours_waiting:.1f}"
