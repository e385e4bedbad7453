import reversion
from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.functional import cached_property
from django.utils.translation import gettext_lazy as _

from rally.common.db import UpdatedAtQuerySetMixin


class RegistrationStatus(models.TextChoices):
    CONFIRMED = 'confirmed', _('Confirmed')
    WAITLIST = 'waitlist', _('Waiting list')
    WITHDRAWN = 'withdrawn', _('Withdrawn')


class RegistrationQuerySet(UpdatedAtQuerySetMixin, models.QuerySet):
    def confirmed_for(self, event):
        return self.filter(event=event, status=RegistrationStatus.CONFIRMED)

    def waitlist_for(self, event):
        """
        Returns the waiting list for the given event, first in line first.

        Arrival order is created_at, with the primary key breaking ties, so there is always exactly one registration
        that is next in line.
        """
        return self.filter(event=event, status=RegistrationStatus.WAITLIST).order_by('created_at', 'pk')


class RegistrationManager(models.Manager.from_queryset(RegistrationQuerySet)):
    pass


@reversion.register()
class Registration(models.Model):
    """
    Information about a Registration.

    A Registration is the link between a Member and an Event. There is at most one per member and event, its status
    changes over time but the row itself is kept (also after withdrawal).
    """

    statuses = RegistrationStatus

    # Registrations that count as "signed up", i.e. holding a slot or a place in line
    ACTIVE_STATUSES = (RegistrationStatus.CONFIRMED, RegistrationStatus.WAITLIST)

    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=False, on_delete=models.CASCADE,
                             related_name='registrations')
    event = models.ForeignKey('events.Event', null=False, on_delete=models.CASCADE,
                              related_name='registrations')
    status = models.CharField(verbose_name=_('Status'), max_length=16, choices=RegistrationStatus.choices, null=False)
    # Arrival order for the waiting list. Set once on insert, status changes leave it alone.
    created_at = models.DateTimeField(verbose_name=_('Creation timestamp'), default=timezone.now, editable=False)
    updated_at = models.DateTimeField(verbose_name=_('Last update timestamp'), auto_now=True, null=False)

    objects = RegistrationManager()

    @cached_property
    def waitlist_position(self):
        """ 1-based position on the waiting list, or None when this registration is not waiting. """
        if self.status != RegistrationStatus.WAITLIST:
            return None
        ahead = Registration.objects.filter(
            Q(created_at__lt=self.created_at) | Q(created_at=self.created_at, pk__lt=self.pk),
            event=self.event_id,
            status=RegistrationStatus.WAITLIST,
        ).count()
        return ahead + 1

    def __str__(self):
        return _('%(user)s - %(event)s - %(status)s') % {
            'user': self.user, 'event': self.event, 'status': self.get_status_display(),
        }

    class Meta:
        verbose_name = _('registration')
        verbose_name_plural = _('registrations')

        indexes = [
            # Index to speed up counting confirmed registrations and scanning the waiting list in order
            models.Index(fields=['event', 'status', 'created_at'], name='idx_event_status_created'),
        ]

        constraints = [
            models.UniqueConstraint(fields=['event', 'user'], name='one_registration_per_user_per_event'),
            models.CheckConstraint(condition=Q(status__in=RegistrationStatus.values), name='registration_status_valid'),
        ]
