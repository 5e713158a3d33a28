"""Errors surfaced by the recipe generation flow.

Only transport-level problems are reported to callers. Malformed model output
is absorbed by the recovery pipeline and never shows up here.
"""


class RecipeGenerationError(Exception):
    status_code = 500
    message = "Failed to generate recipe. Please try again."

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


class InvalidInput(RecipeGenerationError):
    status_code = 400
    message = "Image data required"


class GenerationFailed(RecipeGenerationError):
    status_code = 500
    message = "Failed to generate recipe. Please try again."
