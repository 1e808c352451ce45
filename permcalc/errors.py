import hikari


class PermcalcError(Exception):
    pass


class SnapshotDecodeError(PermcalcError, ValueError):
    pass


class AuditLogDecodeError(PermcalcError, ValueError):
    pass


class MissingPermissionsError(PermcalcError):
    missing: hikari.Permissions

    def __init__(self, missing: hikari.Permissions) -> None:
        super().__init__(f"missing permissions: {missing}")
        self.missing = missing
