from django.contrib import admin

from .models import BloodCamp


@admin.register(BloodCamp)
class BloodCampAdmin(admin.ModelAdmin):
    list_display  = ['camp_name', 'camp_date', 'camp_time', 'district', 'state', 'organizer', 'status']
    list_filter   = ['status', 'state', 'district']
    search_fields = ['camp_name', 'organizer', 'location']
    ordering      = ['camp_date']
    readonly_fields = ['created_by', 'created_at', 'updated_at']

    def save_model(self, request, obj, form, change):
        if not change and obj.created_by_id is None:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
