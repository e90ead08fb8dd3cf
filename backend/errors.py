"""
Error taxonomy for the assistant endpoint.

Every error carries a short user-facing ``message`` and a longer ``details``
string. Both end up in the 500 response body, so neither may contain the
provider credential or raw model output.
"""


class AssistantError(Exception):
    default_message = "An error occurred"

    def __init__(self, message: str | None = None, details: str | None = None):
        self.message = message or self.default_message
        self.details = details or self.message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.details}"


class InvalidRequest(AssistantError):
    default_message = "Invalid request"


class ConfigurationError(AssistantError):
    default_message = "Gemini API key not configured"


class UpstreamUnavailable(AssistantError):
    default_message = "The AI service is unavailable. Please try again later."


class UpstreamTruncated(AssistantError):
    default_message = (
        "The AI response was cut off because it was too long. "
        "Please simplify your request and try again."
    )


class UpstreamMalformed(AssistantError):
    default_message = "The AI service returned an unexpected response."


class InvalidGeneration(AssistantError):
    default_message = "AI generated invalid JSON. Please try again with a simpler request."
