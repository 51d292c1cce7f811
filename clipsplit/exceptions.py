"""Custom exceptions for clipsplit"""

class ClipsplitError(Exception):
    """Base exception for all clipsplit errors"""
    def __init__(self, message: str, module: str = None):
        self.message = message
        self.module = module or "unknown"
        super().__init__(f"[{self.module}] {self.message}")

class ValidationError(ClipsplitError):
    """Timeline state violates a partition invariant"""
    def __init__(self, message: str, module: str = None):
        super().__init__(f"Validation error: {message}", module)

class ExportError(ClipsplitError):
    """Base class for export-related errors"""
    def __init__(self, message: str, module: str = None):
        super().__init__(f"Export error: {message}", module)

class CommandExecutionError(ClipsplitError):
    """External command returned a failure"""

class MetadataError(ClipsplitError):
    """Raised when media metadata cannot be retrieved or parsed"""
    def __init__(self, message: str, property_name: str = None):
        self.property_name = property_name
        super().__init__(f"Metadata error: {message}", "ffprobe")
