from django import forms
from django.contrib import admin, messages
from django.utils.translation import gettext as _
from reversion.admin import VersionAdmin

from apps.registrations.exceptions import RegistrationError
from apps.registrations.services import RegistrationStatusService

from .models import Event


class EventAdminForm(forms.ModelForm):
    class Meta:
        model = Event
        fields = '__all__'

    def clean_capacity(self):
        capacity = self.cleaned_data['capacity']
        if self.instance.pk is None:
            return capacity

        # The admin saves inside a transaction, so this lock keeps registrations for this event from being confirmed
        # until the new capacity is saved
        event = Event.objects.select_for_update().get(pk=self.instance.pk)
        used_slots = Event.objects.used_slots_for(event)
        if capacity is not None and capacity < used_slots:
            raise forms.ValidationError(
                _("Capacity cannot be lower than the number of confirmed registrations ({})").format(used_slots),
            )
        return capacity


@admin.register(Event)
class EventAdmin(VersionAdmin):
    form = EventAdminForm
    list_display = ('title', 'starts_at', 'venue', 'capacity', 'spots_filled', 'waitlist_count')
    search_fields = ('title', 'venue')
    ordering = ('starts_at',)
    date_hierarchy = 'starts_at'

    def get_queryset(self, request):
        return super().get_queryset(request).with_registration_counts()

    @admin.display(description=_('Confirmed'), ordering='spots_filled')
    def spots_filled(self, obj):
        return obj.spots_filled

    @admin.display(description=_('Waiting list'), ordering='waitlist_count')
    def waitlist_count(self, obj):
        return obj.waitlist_count

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)

        # Raising the capacity frees up slots without anyone withdrawing, hand those to the waiting list
        if change and 'capacity' in form.changed_data:
            try:
                promoted = RegistrationStatusService.promote_waitlist(obj.pk)
            except RegistrationError as ex:
                self.message_user(request, _("Could not promote waiting list: {}").format(ex), level=messages.ERROR)
                return
            if promoted:
                self.message_user(
                    request, _("Promoted {} registration(s) from the waiting list").format(len(promoted)),
                    level=messages.SUCCESS,
                )
