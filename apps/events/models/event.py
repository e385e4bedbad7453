import reversion
from django.db import models
from django.db.models import Count, Q
from django.utils.translation import gettext_lazy as _

from apps.registrations.models import Registration
from rally.common.db import QExpr, UpdatedAtQuerySetMixin


class EventQuerySet(UpdatedAtQuerySetMixin, models.QuerySet):
    def with_registration_counts(self):
        """
        Adds spots_filled and waitlist_count annotations.

        These are the number of confirmed and waitlisted registrations for each event. They are plain reads without
        any locking, fine for listings but not for admission decisions (use used_slots_for() inside the event lock
        for those).
        """
        return self.annotate(
            spots_filled=Count('registrations', filter=Q(registrations__status=Registration.statuses.CONFIRMED)),
            waitlist_count=Count('registrations', filter=Q(registrations__status=Registration.statuses.WAITLIST)),
        )

    def for_user(self, user):
        """
        Returns events annotated with the registration of the given user.

         - registration_status: status of the registration of the user for this event, or None when the user never
           registered.
         - is_registered: True when the user currently holds a slot or a place on the waiting list.
        """
        qs = self.annotate(
            registration_status=models.Subquery(
                Registration.objects.filter(
                    event=models.OuterRef('pk'),
                    user=user,
                ).values('status')[:1],
            ),
        )
        # Split into a separate annotate, so registration_status can be referenced
        return qs.annotate(
            is_registered=QExpr(registration_status__in=Registration.ACTIVE_STATUSES),
        )

    def used_slots_for(self, event):
        """ Returns the number of slots used (i.e. the number of confirmed registrations) for the given event. """
        return Registration.objects.filter(event=event, status=Registration.statuses.CONFIRMED).count()


class EventManager(models.Manager.from_queryset(EventQuerySet)):
    pass


@reversion.register()
class Event(models.Model):
    """ A single session or class that members can register for, with a limited number of places. """

    title = models.CharField(max_length=100, verbose_name=_('Title'))
    description = models.TextField(verbose_name=_('Description'), blank=True)
    venue = models.CharField(max_length=100, verbose_name=_('Venue'), blank=True)
    starts_at = models.DateTimeField(verbose_name=_('Starts at'))
    ends_at = models.DateTimeField(verbose_name=_('Ends at'))

    capacity = models.PositiveIntegerField(
        verbose_name=_('Capacity'),
        help_text=_('Maximum number of confirmed registrations. Further registrations end up on the waiting list.'))

    created_at = models.DateTimeField(verbose_name=_('Creation timestamp'), auto_now_add=True)
    updated_at = models.DateTimeField(verbose_name=_('Last update timestamp'), auto_now=True)

    objects = EventManager()

    def __str__(self):
        return self.title

    class Meta:
        verbose_name = _('event')
        verbose_name_plural = _('events')
        ordering = ('starts_at',)

        constraints = [
            models.CheckConstraint(condition=Q(capacity__gt=0), name='event_capacity_positive'),
        ]
