from functools import wraps

from flask import current_app
from flask_login import current_user

from errors import Forbidden


def current_settings():
    return current_app.extensions["settings"]


def is_admin(user):
    return user.is_authenticated and user.is_admin(current_settings().admin_email)


# Only the configured admin account may pass; anonymous callers get 403 too
def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_admin(current_user):
            raise Forbidden("Only admins can access this resource.")
        return view(*args, **kwargs)
    return wrapper
