# vibepm/services/analysis.py
"""
Старый формат хранения: AI-анализ дописывался в текст идеи после маркера.
Сейчас анализ живёт в отдельной колонке, а маркер нужен только для разбора
присланных в старом формате текстов и для файла экспорта.
"""
from typing import NamedTuple, Optional

AI_MARKER = "\n\n---\n✨ AI Analysis:\n"

class ParsedCapture(NamedTuple):
    raw_idea: str
    analysis: Optional[str]

def parse_analysis(content: str) -> ParsedCapture:
    """
    Делит content на исходную идею и анализ (по первому маркеру).
    """
    marker_index = content.find(AI_MARKER)
    if marker_index == -1:
        return ParsedCapture(raw_idea=content, analysis=None)
    return ParsedCapture(
        raw_idea=content[:marker_index],
        analysis=content[marker_index + len(AI_MARKER):],
    )

def append_analysis(raw_idea: str, analysis: str) -> str:
    return raw_idea + AI_MARKER + analysis
