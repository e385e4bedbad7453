from django.contrib.auth import get_user_model
from django.http import Http404
from django.shortcuts import get_object_or_404
from django.utils.functional import cached_property
from django.views.generic.list import BaseListView

from apps.registrations.models import Registration
from rally.common.views import JSONResponseMixin

from .models import Event


class EventList(JSONResponseMixin, BaseListView):
    """
    All events with the number of confirmed and waitlisted registrations.

    With ?user=<id>, each event also includes the registration status of that member.
    """

    model = Event
    ordering = ('starts_at', 'pk')

    @cached_property
    def member(self):
        user_id = self.request.GET.get('user')
        if user_id is None:
            return None
        if not user_id.isdigit():
            raise Http404("Member not found")
        return get_object_or_404(get_user_model(), pk=user_id)

    def get_queryset(self):
        qs = super().get_queryset().with_registration_counts()
        if self.member is not None:
            qs = qs.for_user(self.member)
        return qs

    def get_data(self, context):
        return [self.event_data(event) for event in context['object_list']]

    def event_data(self, event):
        data = {
            'id': event.pk,
            'title': event.title,
            'description': event.description,
            'venue': event.venue,
            'start_time': event.starts_at.isoformat(),
            'end_time': event.ends_at.isoformat(),
            'capacity': event.capacity,
            'spots_filled': event.spots_filled,
            'waitlist_count': event.waitlist_count,
        }
        if self.member is not None:
            data['user_status'] = event.registration_status
            data['is_registered'] = bool(event.is_registered)
        return data


class EventRegistrationsBase(JSONResponseMixin, BaseListView):
    """ Base class for the public lists of names of members registered for an event. """

    model = Registration
    status = None
    key = None

    @cached_property
    def event(self):
        return get_object_or_404(Event, pk=self.kwargs['pk'])

    def get_queryset(self):
        return super().get_queryset().filter(event=self.event, status=self.status).select_related('user')

    def get_data(self, context):
        return {self.key: [registration.user.get_full_name() for registration in context['object_list']]}


class EventParticipants(EventRegistrationsBase):
    """ Names of the confirmed members. """

    status = Registration.statuses.CONFIRMED
    key = 'participants'
    ordering = ('user__last_name', 'user__first_name')


class EventWaitlist(EventRegistrationsBase):
    """ Names of the waiting members, first in line first. """

    status = Registration.statuses.WAITLIST
    key = 'waitlist'
    ordering = ('created_at', 'pk')
