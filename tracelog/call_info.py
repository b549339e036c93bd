import inspect
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class CallInfo(BaseModel):
    """Identifies where a log line came from."""

    model_config = ConfigDict(frozen=True)

    member: str
    file: str | None = None
    line: int | None = None

    def __str__(self) -> str:
        if self.file is None:
            return self.member
        location = Path(self.file).name
        if self.line is None:
            return f"{location}:{self.member}"
        return f"{location}:{self.member}:{self.line}"

    @classmethod
    def site(cls, depth: int = 1) -> "CallInfo":
        """Capture the calling function's name, file and line.

        Args:
            depth: How many frames above the caller of `site` to report.
                The default describes the function that called `site`.
        """
        frame = inspect.currentframe()
        try:
            for _ in range(depth):
                if frame is None or frame.f_back is None:
                    break
                frame = frame.f_back
            if frame is None:
                return cls(member="<unknown>")
            return cls(
                member=frame.f_code.co_name,
                file=frame.f_code.co_filename,
                line=frame.f_lineno,
            )
        finally:
            del frame
