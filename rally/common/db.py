from django.db import models


def QExpr(*args, **kwargs):
    """ Builds a Q object wrapped as a boolean expression, usable in annotate(). """
    return models.ExpressionWrapper(models.Q(*args, **kwargs), output_field=models.BooleanField())


class UpdatedAtQuerySetMixin:
    """
    Refuses bulk updates on querysets of models with an updated_at field.

    QuerySet.update() skips auto_now fields and model save() hooks, so status changes must go through save() on
    (locked) instances instead.
    """

    def update(self, **kwargs):
        raise NotImplementedError("Update does not set updated_at / auto_now fields, save() instances instead")
