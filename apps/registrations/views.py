from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.utils.translation import gettext as _
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from rally.common.views import error_response, parse_json_body

from .exceptions import RegistrationError, TransientFailure
from .forms import SubmitRegistrationForm
from .services import RegistrationStatusService


# Called by other services rather than browsers, which authenticate and authorize members before the request gets here
@method_decorator(csrf_exempt, name='dispatch')
class SubmitRegistration(View):
    """ Register a member for an event, or withdraw them. """

    http_method_names = ['post']

    def post(self, request):
        payload = parse_json_body(request)
        if payload is None:
            return error_response(_("Request body must be a JSON object"), status=400)

        form = SubmitRegistrationForm.from_json(payload)
        if not form.is_valid():
            return error_response(_("Missing registration details"), status=400, errors=form.json_errors())

        try:
            result = RegistrationStatusService.submit(
                user_id=form.cleaned_data['user_id'],
                event_id=form.cleaned_data['event_id'],
                desired_status=form.cleaned_data['status'],
            )
        except RegistrationError as ex:
            response = error_response(ex.message, status=ex.status_code, retryable=ex.retryable, errors=ex.errors)
            if isinstance(ex, TransientFailure):
                response['Retry-After'] = str(settings.REGISTRATION_RETRY_AFTER)
            return response

        if result.withdrawn:
            return HttpResponse(status=204)

        if result.capacity_conflict:
            # Not an error, the member is on the waiting list, but tell them apart from an actual confirmation
            return JsonResponse({
                'message': _("Event is full. You have been added to the waitlist."),
                'status': result.status,
            }, status=409)

        return JsonResponse({
            'message': _("Registration updated"),
            'status': result.status,
        })
