# accounts/constants.py

class UserRole:
    ADMIN = "admin"
    DIRECTOR = "director"
    MANAGER = "manager"
    ATTENDANT = "attendant"

    CHOICES = [
        (ADMIN, "Administrator"),
        (DIRECTOR, "Director"),
        (MANAGER, "Station manager"),
        (ATTENDANT, "Pump attendant"),
    ]


class RoleGroups:
    # Who may read sales and reports
    REPORTING = (
        UserRole.ADMIN,
        UserRole.DIRECTOR,
        UserRole.MANAGER,
    )

    # Who records and corrects sales on the forecourt
    SALES_WRITERS = (
        UserRole.MANAGER,
    )

    # Who approves, rejects and marks restocks delivered
    SUPPLY_APPROVERS = (
        UserRole.DIRECTOR,
    )

    ANALYTICS = (
        UserRole.ADMIN,
        UserRole.DIRECTOR,
    )
