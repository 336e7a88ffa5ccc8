class StringAnalyzerError(Exception):
    """Base class for errors raised by the string analyzer"""


class InvalidInput(StringAnalyzerError):
    """Value handed to the analyzer is not a string"""


class DuplicateRecord(StringAnalyzerError):
    """A record with the same content hash is already stored"""

    def __init__(self, string_id: str):
        self.string_id = string_id
        super().__init__("String already exists in the system")


class NotFound(StringAnalyzerError):
    """No record is stored under the given content hash"""

    def __init__(self, string_id: str):
        self.string_id = string_id
        super().__init__("String does not exist in the system")


class UnparsableQuery(StringAnalyzerError):
    """Natural language query matched none of the known patterns"""

    def __init__(self, query: str):
        self.query = query
        super().__init__("Unable to parse natural language query")
