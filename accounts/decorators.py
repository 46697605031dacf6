from functools import wraps

from rest_framework.exceptions import PermissionDenied, NotAuthenticated


def is_self_or_admin(user, account_id) -> bool:
    return bool(user and user.is_authenticated and (user.pk == account_id or user.is_admin))


def ensure_owner_or_admin(user, owner_id):
    """
    Raise PermissionDenied unless `user` owns the record or is an administrator.
    """
    if not is_self_or_admin(user, owner_id):
        raise PermissionDenied("Access denied")


def self_or_admin(param='user_id'):
    """
    Guard an API view whose URL carries an account id: only that account or
    an administrator may proceed.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            user = request.user

            if not user or not user.is_authenticated:
                raise NotAuthenticated("Authentication required")

            ensure_owner_or_admin(user, kwargs.get(param))

            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator
