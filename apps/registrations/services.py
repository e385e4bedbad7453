import logging
from contextlib import contextmanager

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone
from django.utils.translation import gettext as _

from apps.events.models import Event

from .exceptions import InvalidRequest, NotFound, TransientFailure
from .models import Registration

logger = logging.getLogger(__name__)

CONFIRMED = Registration.statuses.CONFIRMED
WAITLIST = Registration.statuses.WAITLIST
WITHDRAWN = Registration.statuses.WITHDRAWN


class SubmitResult:
    """
    Outcome of a successful RegistrationStatusService.submit() call.

    status is the final status of the registration of the member (None when withdrawing without ever having
    registered). When confirmed was requested but the event was full, capacity_conflict is True: the request succeeded,
    but the member ended up on the waiting list instead. promoted lists the registrations that were moved from the
    waiting list to confirmed as part of the same transaction.
    """

    def __init__(self, requested, status, registration=None, promoted=()):
        self.requested = requested
        self.status = status
        self.registration = registration
        self.promoted = list(promoted)

    @property
    def withdrawn(self):
        return self.requested == WITHDRAWN

    @property
    def capacity_conflict(self):
        return self.requested == CONFIRMED and self.status == WAITLIST

    def __repr__(self):
        return '<SubmitResult requested={} status={} promoted={}>'.format(
            self.requested, self.status, [r.pk for r in self.promoted],
        )


class RegistrationStatusService:
    SUBMITTABLE_STATUSES = (CONFIRMED, WITHDRAWN)

    @classmethod
    def submit(cls, user_id, event_id, desired_status):
        """
        Registers a member for an event, or withdraws them.

        desired_status must be CONFIRMED or WITHDRAWN, anything else (or a missing id) raises InvalidRequest without
        touching the database.

        Registering confirms the member when the event has a free slot and puts them on the waiting list otherwise.
        When the member already has a registration and the event is full, nothing changes (a confirmed member is never
        bumped to the waiting list, a withdrawn member stays withdrawn). Withdrawing is idempotent and hands the freed
        slot to the first member on the waiting list.

        Everything happens in a single transaction that locks the event first, so concurrent requests for the same
        event are serialized and can never confirm more registrations than the event capacity. Raises NotFound when
        the event (or, when registering, the member) does not exist and TransientFailure when the database gave up,
        in both cases nothing is changed.
        """
        user_id = cls._clean_id(user_id, 'user_id')
        event_id = cls._clean_id(event_id, 'event_id')
        if desired_status not in cls.SUBMITTABLE_STATUSES:
            raise InvalidRequest(
                _("Unknown registration status"),
                errors={'status': [_("Must be one of: {}").format(", ".join(cls.SUBMITTABLE_STATUSES))]},
            )

        with cls._transaction(user=user_id, event=event_id):
            if desired_status == WITHDRAWN:
                return cls._withdraw(user_id, event_id)
            return cls._register(user_id, event_id)

    @classmethod
    def promote_waitlist(cls, event_id):
        """
        Confirms waitlisted registrations, first in line first, until the event is full again.

        Needed when slots free up without a withdrawal, e.g. when the capacity of an event is raised. Returns the
        promoted registrations.
        """
        with cls._transaction(event=event_id):
            event = cls._lock_event(event_id)
            return cls._fill_from_waitlist(event)

    @classmethod
    def _register(cls, user_id, event_id):
        event = cls._lock_event(event_id)

        if not get_user_model().objects.filter(pk=user_id).exists():
            raise NotFound(_("Member not found"))

        # Slots that are free without anyone having withdrawn (e.g. capacity was raised) belong to the members
        # already waiting, a newcomer gets in line behind them.
        promoted = cls._fill_from_waitlist(event)

        used_slots = Event.objects.used_slots_for(event)
        registration = Registration.objects.select_for_update().filter(user=user_id, event=event).first()
        status = cls._admission_status(event, used_slots, registration)

        if registration is None:
            registration = Registration.objects.create(user_id=user_id, event=event, status=status)
        elif registration.status != status:
            update_fields = ['status', 'updated_at']
            if registration.status == WITHDRAWN and not settings.REGISTRATION_REREGISTER_KEEPS_PRIORITY:
                registration.created_at = timezone.now()
                update_fields.append('created_at')
            registration.status = status
            registration.save(update_fields=update_fields)

        logger.info("Member %s registered for event %s: %s", user_id, event.pk, status)
        return SubmitResult(CONFIRMED, status, registration=registration, promoted=promoted)

    @classmethod
    def _withdraw(cls, user_id, event_id):
        event = cls._lock_event(event_id)

        registration = Registration.objects.select_for_update().filter(user=user_id, event=event).first()
        if registration is not None and registration.status != WITHDRAWN:
            registration.status = WITHDRAWN
            registration.save(update_fields=['status', 'updated_at'])
            logger.info("Member %s withdrew from event %s", user_id, event.pk)

        promoted = cls._fill_from_waitlist(event)
        status = registration.status if registration is not None else None
        return SubmitResult(WITHDRAWN, status, registration=registration, promoted=promoted)

    @staticmethod
    def _admission_status(event, used_slots, registration):
        if used_slots < event.capacity:
            return CONFIRMED
        if registration is None:
            return WAITLIST
        # Full, and already registered before: keep what they have (also when withdrawn)
        return registration.status

    @staticmethod
    def _fill_from_waitlist(event):
        """ Promotes waiting registrations until the event is full. Must be called with the event locked. """
        free_slots = event.capacity - Event.objects.used_slots_for(event)
        if free_slots <= 0:
            return []

        promoted = list(Registration.objects.waitlist_for(event).select_for_update()[:free_slots])
        for registration in promoted:
            registration.status = CONFIRMED
            registration.save(update_fields=['status', 'updated_at'])
            logger.info("Promoted member %s from the waiting list of event %s", registration.user_id, event.pk)
        return promoted

    @staticmethod
    def _lock_event(event_id):
        # Lock the event, to prevent multiple registrations from taking up the same slot. This locks only the event
        # row (no joins), so requests for other events are never blocked.
        try:
            return Event.objects.select_for_update().get(pk=event_id)
        except Event.DoesNotExist:
            raise NotFound(_("Event not found"))

    @staticmethod
    def _clean_id(value, name):
        if value is None or value == '':
            raise InvalidRequest(_("Missing registration details"), errors={name: [_("This field is required.")]})
        try:
            if isinstance(value, bool):
                raise TypeError(value)
            value = int(value)
        except (TypeError, ValueError):
            raise InvalidRequest(_("Invalid registration details"), errors={name: [_("Enter a whole number.")]})
        if value < 1:
            raise InvalidRequest(_("Invalid registration details"), errors={name: [_("Enter a whole number.")]})
        return value

    @staticmethod
    @contextmanager
    def _transaction(**context):
        # Any database error rolls back the whole transaction (no half-done promotions), callers only ever see
        # TransientFailure.
        try:
            with transaction.atomic():
                yield
        except DatabaseError as ex:
            logger.warning("Registration transaction rolled back (%s): %s",
                           ", ".join("{}={}".format(k, v) for k, v in sorted(context.items())), ex)
            raise TransientFailure(_("Could not update registration, please try again")) from ex
