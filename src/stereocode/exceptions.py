# Custom exceptions for Stereocode

class StereocodeError(Exception):
    """Base exception for all application-specific errors."""
    pass

class ConfigError(StereocodeError):
    """Raised for configuration-related problems."""
    pass

class LanguageNotSupportedError(ConfigError):
    """Raised when a language name does not map to a supported language."""
    def __init__(self, language: str, supported: list):
        self.language = language
        self.supported = supported
        super().__init__(
            f"Language '{language}' is not supported. Supported languages: {', '.join(supported)}"
        )

class FactsLoadError(StereocodeError):
    """Raised when a facts file cannot be read or does not match the fact-set contract."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Failed to load facts from {file_path}: {message}")

class FactContractError(StereocodeError):
    """Raised when the fact-extraction collaborator hands over inconsistent facts."""
    def __init__(self, unit_id: int, location: str, message: str):
        self.unit_id = unit_id
        self.location = location
        self.message = message
        super().__init__(f"Unit {unit_id} at '{location}': {message}")

class AttributeFactsMismatchError(FactContractError):
    """Raised when attribute name and type lists cannot be paired."""

    def __init__(
        self,
        unit_id: int,
        location: str,
        name_count: int,
        type_count: int,
        scope: str = "attribute",
    ):
        self.name_count = name_count
        self.type_count = type_count
        self.scope = scope
        super().__init__(
            unit_id,
            location,
            f"{scope} name/type lists are misaligned ({name_count} names, {type_count} types)",
        )

class ClassificationError(StereocodeError):
    """Raised when classifying a class fails; carries the entity's location."""
    def __init__(self, unit_id: int, location: str, message: str):
        self.unit_id = unit_id
        self.location = location
        self.message = message
        super().__init__(f"Failed to classify unit {unit_id} at '{location}': {message}")
