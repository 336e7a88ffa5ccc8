from datetime import timezone

from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, Text

from string_analyzer.database import Base


class StringAnalysis(Base):
    __tablename__ = "string_analyses"

    # surrogate key keeps insertion order for listing
    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False, index=True)  # SHA-256 hash
    value = Column(Text, nullable=False)
    length = Column(Integer, nullable=False)
    is_palindrome = Column(Boolean, nullable=False)
    unique_characters = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False)
    sha256_hash = Column(String(64), nullable=False)
    character_frequency_map = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_record(cls, record: dict) -> "StringAnalysis":
        properties = record["properties"]
        return cls(
            id=record["id"],
            value=record["value"],
            length=properties["length"],
            is_palindrome=properties["is_palindrome"],
            unique_characters=properties["unique_characters"],
            word_count=properties["word_count"],
            sha256_hash=properties["sha256_hash"],
            character_frequency_map=properties["character_frequency_map"],
            created_at=record["created_at"],
        )

    def to_record(self) -> dict:
        created_at = self.created_at
        # SQLite drops tzinfo on the way back
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return {
            "id": self.id,
            "value": self.value,
            "properties": {
                "length": self.length,
                "is_palindrome": self.is_palindrome,
                "unique_characters": self.unique_characters,
                "word_count": self.word_count,
                "sha256_hash": self.sha256_hash,
                "character_frequency_map": self.character_frequency_map,
            },
            "created_at": created_at,
        }
