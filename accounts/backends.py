# accounts/backends.py
from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

User = get_user_model()


class EmailBackend(ModelBackend):
    """
    Sign in with the account email (any case). The username is accepted as
    well so the Django admin login keeps working.
    """

    def _lookup(self, identifier):
        account = User.objects.filter(email__iexact=identifier).first()
        if account is None:
            account = User.objects.filter(username=identifier).first()
        return account

    def authenticate(self, request, username=None, password=None, **kwargs):
        identifier = username if username is not None else kwargs.get('email')
        if not identifier or password is None:
            return None

        account = self._lookup(identifier.strip())
        if account is None:
            # Hash anyway so unknown emails take as long as wrong passwords
            User().set_password(password)
            return None

        if account.check_password(password) and self.user_can_authenticate(account):
            return account
        return None

    def user_can_authenticate(self, user):
        """Inactive and locked accounts cannot sign in."""
        if getattr(user, 'is_locked', False):
            return False
        return super().user_can_authenticate(user)
