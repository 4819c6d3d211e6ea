# salesy/core/upload_state.py
import enum
from typing import Optional

from salesy.exceptions import UploadStateError
from salesy.models import ImportSummary


class UploadState(enum.Enum):
    IDLE = 'idle'
    UPLOADING = 'uploading'
    SUCCESS = 'success'
    ERROR = 'error'

    def __str__(self):
        return self.value


class UploadStatus:
    """Tracks one upload slot through Idle -> Uploading -> Success | Error.

    A finished upload (Success or Error) can start a new one directly or be
    reset to Idle. Nothing may start while an upload is in flight.
    """

    def __init__(self):
        self.state = UploadState.IDLE
        self.file_name: Optional[str] = None
        self.summary: Optional[ImportSummary] = None
        self.error_message: Optional[str] = None

    @property
    def is_uploading(self) -> bool:
        return self.state is UploadState.UPLOADING

    def _require(self, *states: UploadState, action: str) -> None:
        if self.state not in states:
            raise UploadStateError(
                f"Cannot {action} while upload is {self.state.value}",
                details={'state': self.state.value, 'action': action}
            )

    def start(self, file_name: str) -> None:
        self._require(UploadState.IDLE, UploadState.SUCCESS, UploadState.ERROR, action='start')
        self.state = UploadState.UPLOADING
        self.file_name = file_name
        self.summary = None
        self.error_message = None

    def succeed(self, summary: ImportSummary) -> None:
        self._require(UploadState.UPLOADING, action='succeed')
        self.state = UploadState.SUCCESS
        self.summary = summary

    def fail(self, message: str) -> None:
        self._require(UploadState.UPLOADING, action='fail')
        self.state = UploadState.ERROR
        self.error_message = message

    def reset(self) -> None:
        self._require(UploadState.IDLE, UploadState.SUCCESS, UploadState.ERROR, action='reset')
        self.state = UploadState.IDLE
        self.file_name = None
        self.summary = None
        self.error_message = None
