from rest_framework.permissions import BasePermission

from accounts.authorization import Principal, authorize


class HasRequiredRole(BasePermission):
    """
    Role guard driven by the view.

    Views declare ``required_roles`` as a mapping of action name to the
    roles allowed for it; ``"*"`` is the fallback entry.
    """

    message = "Your role does not allow this operation."

    def has_permission(self, request, view):
        principal = Principal.from_user(request.user)
        if principal is None:
            return False

        required = getattr(view, "required_roles", {}) or {}
        action = getattr(view, "action", None) or request.method.lower()

        roles = required.get(action, required.get("*", ()))
        return authorize(principal, roles)
