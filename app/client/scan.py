"""Client-side scan state: the draft being filled in and the session around it."""
from dataclasses import dataclass, field
from enum import Enum

from app.schemas.analysis import AnalysisRequest
from app.schemas.report import ComplianceReport
from app.utils.exceptions import InvalidRequest

PHOTO_SLOTS: tuple[tuple[str, str], ...] = (
    ("front", "Front"),
    ("rear", "Rear"),
    ("left", "Left Side"),
    ("right", "Right Side"),
)


class CaptureStep(str, Enum):
    ADDRESS = "address"
    JURISDICTION = "jurisdiction"
    CAPTURE = "capture"
    REVIEW = "review"
    ANALYZING = "analyzing"
    REPORT = "report"


@dataclass
class PhotoSlot:
    id: str
    label: str
    data: str | None = None  # data URL of the compressed capture


def _default_slots() -> list[PhotoSlot]:
    return [PhotoSlot(id=slot_id, label=label) for slot_id, label in PHOTO_SLOTS]


@dataclass
class ScanDraft:
    address: str = ""
    jurisdiction: str = ""
    slots: list[PhotoSlot] = field(default_factory=_default_slots)

    def _slot(self, slot_id: str) -> PhotoSlot:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        raise KeyError(slot_id)

    def set_photo(self, slot_id: str, data: str) -> None:
        self._slot(slot_id).data = data

    def remove_photo(self, slot_id: str) -> None:
        self._slot(slot_id).data = None

    @property
    def photos(self) -> list[str]:
        return [slot.data for slot in self.slots if slot.data]

    def can_proceed(self, step: CaptureStep) -> bool:
        if step is CaptureStep.ADDRESS:
            return bool(self.address.strip())
        if step is CaptureStep.JURISDICTION:
            return bool(self.jurisdiction)
        if step is CaptureStep.CAPTURE:
            return bool(self.photos)
        return step is CaptureStep.REVIEW

    def build_request(self) -> AnalysisRequest:
        photos = self.photos
        if not photos:
            raise InvalidRequest("No photos provided")
        return AnalysisRequest(
            photos=photos,
            address=self.address.strip() or None,
            jurisdiction=self.jurisdiction or None,
        )


@dataclass(frozen=True)
class ScanResult:
    report: ComplianceReport
    address: str
    photos: tuple[str, ...]


@dataclass
class ScanSession:
    """One user's scan flow, including the most recent result.

    ``latest`` is overwritten by every successful scan.
    """

    draft: ScanDraft = field(default_factory=ScanDraft)
    step: CaptureStep = CaptureStep.ADDRESS
    latest: ScanResult | None = None
    error: str = ""
    in_flight: bool = False

    def advance(self) -> CaptureStep:
        """Move to the next wizard step if the current one is complete."""
        if not self.draft.can_proceed(self.step):
            return self.step
        if self.step is CaptureStep.ADDRESS:
            self.step = CaptureStep.CAPTURE if self.draft.jurisdiction else CaptureStep.JURISDICTION
        elif self.step is CaptureStep.JURISDICTION:
            self.step = CaptureStep.CAPTURE
        elif self.step is CaptureStep.CAPTURE:
            self.step = CaptureStep.REVIEW
        return self.step

    def begin(self) -> None:
        self.in_flight = True
        self.error = ""
        self.step = CaptureStep.ANALYZING

    def fail(self, message: str) -> None:
        # draft and its photos are kept so the user can retry
        self.in_flight = False
        self.error = message
        self.step = CaptureStep.REVIEW

    def complete(self, result: ScanResult) -> None:
        self.in_flight = False
        self.latest = result
        self.step = CaptureStep.REPORT

    def start_new_scan(self) -> None:
        self.draft = ScanDraft()
        self.step = CaptureStep.ADDRESS
        self.error = ""
