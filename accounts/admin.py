from django.contrib import admin
from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(admin.ModelAdmin):
    list_display = ('email', 'full_name', 'role', 'donor_status', 'is_registered_donor', 'is_locked')
    search_fields = ('email', 'full_name', 'phone')
    list_filter = ('role', 'donor_status', 'is_registered_donor', 'is_locked')
    actions = ['unlock_accounts']

    @admin.action(description='Unlock selected accounts')
    def unlock_accounts(self, request, queryset):
        updated = queryset.update(is_locked=False, failed_attempts=0)
        self.message_user(request, f'{updated} account(s) unlocked.')
