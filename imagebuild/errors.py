# imagebuild\errors.py
class ImageBuildError(Exception):
    """Base class for all image build errors."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class DescriptorError(ImageBuildError):
    """Raised when a build descriptor cannot be read or violates a constraint."""
    def __init__(self, reason: str, source: str = "<defaults>"):
        self.source = source
        super().__init__(f"Invalid image descriptor ({source}): {reason}")


class BuildCommandError(ImageBuildError):
    """Raised when the container client fails or cannot be started."""
    def __init__(self, command: list, details: str, returncode: int = -1):
        self.command = command
        self.returncode = returncode
        super().__init__(f"Image build failed ({' '.join(command)}): {details}")
