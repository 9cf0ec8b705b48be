from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class FilenameRequest:
    brain_id: str
    local_name: str
    slide_id: str
    series_type: str
    start_section: int = 1
    end_section: int = 1
    increment: int = 1


@dataclass(frozen=True)
class GeneratedFilename:
    filename: str
    section_number: int
    slide_number: int
    timestamp: str  # shared by every record in the batch

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "sectionNumber": self.section_number,
            "slideNumber": self.slide_number,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GeneratedFilename":
        return cls(
            filename=data["filename"],
            section_number=int(data["sectionNumber"]),
            slide_number=int(data["slideNumber"]),
            timestamp=data["timestamp"],
        )


@dataclass(frozen=True)
class SeriesType:
    id: int
    name: str
    mnemonic: str
    description: str | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        if self.description is None:
            del data["description"]
        return data
