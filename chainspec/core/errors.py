"""
Exceptions raised by the generator
"""


class ChainSpecError(Exception):
    """Base class for chainspec errors"""
    pass


class TemplateNotFound(ChainSpecError):
    """Raised when a template name has no stored text"""

    def __init__(self, template_name: str, location: str = ""):
        self.template_name = template_name
        self.location = location
        message = f"Template not found: {template_name}"
        if location:
            message += f" (searched {location})"
        super().__init__(message)
