import json

from django.http import JsonResponse


class JSONResponseMixin:
    """
    Render a view's context as JSON instead of through a template.

    Subclasses should define get_data(context), returning something JsonResponse can serialize.
    """

    def render_to_response(self, context, **response_kwargs):
        return JsonResponse(self.get_data(context), safe=False, **response_kwargs)

    def get_data(self, context):
        raise NotImplementedError("Subclasses of JSONResponseMixin must define get_data()")


def error_response(error, status, retryable=False, **extra):
    """ Builds the JSON body shared by all API failures, so clients can tell retryable errors apart. """
    body = {'error': str(error), 'retryable': retryable}
    body.update(extra)
    return JsonResponse(body, status=status)


def parse_json_body(request):
    """ Returns the decoded JSON object in the request body, or None when the body is not a JSON object. """
    try:
        payload = json.loads(request.body.decode(request.encoding or 'utf-8'))
    except (UnicodeDecodeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    return payload
