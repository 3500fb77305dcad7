from rest_framework import status

from config.envelope import success_response


class SoftDeleteMixin:
    """
    Replace DELETE with deactivation.

    The record stays in place (orders and bills keep referring to it) and
    drops out of the active listings. ``deactivated_message`` is returned
    in the envelope.
    """

    deactivated_message = 'Deactivated successfully'

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        instance.is_active = False
        instance.save(update_fields=['is_active', 'updated_at'])
        return success_response(
            message=self.deactivated_message,
            status_code=status.HTTP_200_OK,
        )
