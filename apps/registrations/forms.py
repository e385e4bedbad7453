from django import forms
from django.utils.translation import gettext_lazy as _

from .models import Registration
from .services import RegistrationStatusService


class SubmitRegistrationForm(forms.Form):
    """
    Validates a registration request before it reaches the database.

    The request body uses the camelCase names of the public API (userId, eventId, status), see from_json().
    """

    JSON_FIELDS = {
        'userId': 'user_id',
        'eventId': 'event_id',
        'status': 'status',
    }

    user_id = forms.IntegerField(min_value=1, label=_('Member'))
    event_id = forms.IntegerField(min_value=1, label=_('Event'))
    status = forms.ChoiceField(
        label=_('Status'),
        choices=[
            (s.value, s.label) for s in Registration.statuses if s in RegistrationStatusService.SUBMITTABLE_STATUSES
        ],
    )

    @classmethod
    def from_json(cls, payload):
        data = {field: payload.get(key) for key, field in cls.JSON_FIELDS.items()}
        return cls(data=data)

    def json_errors(self):
        """ Returns the form errors keyed by the public API names. """
        names = {field: key for key, field in self.JSON_FIELDS.items()}
        return {names.get(field, field): [str(e) for e in errors] for field, errors in self.errors.items()}
