from django.contrib import admin, messages
from django.core.exceptions import PermissionDenied
from django.utils.translation import gettext as _
from reversion.admin import VersionAdmin

from .exceptions import RegistrationError
from .models import Registration
from .services import RegistrationStatusService


@admin.register(Registration)
class RegistrationAdmin(VersionAdmin):
    list_display = ('user', 'event', 'status', 'created_at', 'updated_at')
    list_filter = ('status', 'event')
    search_fields = ('user__first_name', 'user__last_name', 'user__email', 'event__title')
    list_select_related = ('user', 'event')
    ordering = ('event', 'status', 'created_at')
    # Saving a form would bypass the event lock and the capacity check, so status changes only go through the
    # service (see withdraw_registrations)
    readonly_fields = ('user', 'event', 'status', 'created_at', 'updated_at')
    actions = ['withdraw_registrations']

    def has_add_permission(self, request):
        # Members register through the API
        return False

    def has_delete_permission(self, request, obj=None):
        # Registrations are withdrawn, not deleted
        return False

    def revision_view(self, request, object_id, version_id, extra_context=None):
        # Reverting writes an old status straight to the database
        raise PermissionDenied

    def recover_view(self, request, version_id, extra_context=None):
        raise PermissionDenied

    @admin.action(description=_('Withdraw selected registrations'))
    def withdraw_registrations(self, request, queryset):
        # Go through the service one by one, so each withdrawal hands its slot to the waiting list
        withdrawn = promoted = 0
        for registration in queryset.exclude(status=Registration.statuses.WITHDRAWN):
            try:
                result = RegistrationStatusService.submit(
                    registration.user_id, registration.event_id, Registration.statuses.WITHDRAWN,
                )
            except RegistrationError as ex:
                self.message_user(
                    request, _("Could not withdraw {}: {}").format(registration, ex), level=messages.ERROR,
                )
                continue
            withdrawn += 1
            promoted += len(result.promoted)

        self.message_user(
            request,
            _("Withdrew {} registration(s), promoted {} from the waiting list").format(withdrawn, promoted),
            level=messages.SUCCESS,
        )
