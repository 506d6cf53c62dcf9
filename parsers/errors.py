class AWRParserError(Exception):
    """Base error for the AWR report parser."""


class ReportReadError(AWRParserError):
    """
    Raised when the report content cannot be obtained.

    This is the ONLY error the parser raises. Everything that goes wrong
    after the content is read resolves to a default value instead.
    """

    def __init__(self, filename, reason) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__("Could not read report '{}': {}".format(filename, reason))
