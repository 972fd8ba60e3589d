"""JSON export of decoded game databases."""

import json
import logging
from pathlib import Path

from pyquill.decoder.models import GameData

logger = logging.getLogger(__name__)

EXPORT_VERSION = 1


class GameDataExporter:
    """Serialises GameData to JSON."""

    def __init__(self, game: GameData, indent: int | None = 2, ensure_ascii: bool = False) -> None:
        self.game = game
        # json.dumps treats indent=0 as "newlines only"; 0 means compact here
        self.indent = indent or None
        self.ensure_ascii = ensure_ascii

    def to_json(self) -> dict:
        """Convert the game to a JSON-compatible dict."""
        return {
            "meta": {
                "version": EXPORT_VERSION,
                "objects": len(self.game.objects),
                "locations": len(self.game.locations),
                "messages": len(self.game.messages),
                "words": len(self.game.vocabulary),
            },
            **self.game.to_dict(),
        }

    def dumps(self) -> str:
        """Render the game as a JSON document."""
        return json.dumps(
            self.to_json(), indent=self.indent, ensure_ascii=self.ensure_ascii
        )

    def save_json(self, output_path: Path) -> None:
        """Save the game as JSON."""
        output_path = Path(output_path)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.dumps())
            f.write("\n")
        logger.info(f"Saved to {output_path}")
