"""
Custom exception hierarchy for the DNS inventory tools.

Every tool terminates with a diagnostic and a non-zero status when one of
these escapes a service call. Soft conditions (an unknown host in a hostvars
query, a CNAME without a resolvable target, an unparseable zone line) are not
errors and never raise.

Example usage:
    from dns_inventory.exceptions import RuleParseError
    raise RuleParseError("expected format 'CIDR<space>Group Name'", line_number=3)
"""

class AppError(Exception):
    """
    Base class for all application errors.

    Catch this at the command line boundary to turn any failure into a
    diagnostic and exit status 1.
    """
    pass

class DatabaseError(AppError):
    """
    Raised when the backing store cannot be opened, prepared or written.

    Typical causes:
        - Invalid database path or missing write permission
        - File exists but is not a SQLite database
        - Schema creation or migration failure
        - Transaction begin/commit failure

    Example:
        raise DatabaseError("No write permission for database directory: /data")
    """
    pass

class ZoneImportError(AppError):
    """
    Raised when zone transfer records cannot be read.

    Individual malformed lines are skipped silently; this is reserved for
    failures of the input stream itself.
    """
    pass

class RuleParseError(AppError):
    """
    Raised for an unusable CIDR rule source.

    Any such error aborts the whole assignment run before anything is written.

    Attributes:
        line_number: 1-based line of the offending rule, or None when the
            error concerns the source as a whole.

    Example:
        raise RuleParseError("only IPv4 CIDRs are allowed ('fd00::/8')", line_number=7)
    """
    def __init__(self, message, line_number=None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)

class InventoryError(AppError):
    """
    Raised when an inventory document cannot be rendered.
    """
    pass

class NotFoundError(AppError):
    """
    Raised when an administrative edit targets a host or group that does not exist.

    Example:
        raise NotFoundError("Host not found: web01.example.com")
    """
    pass
