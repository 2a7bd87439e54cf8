"""Substring search and autosuggestion over entry text."""

from .config import config
from .models import Entry

_BOUNDARY_PUNCTUATION = ".,?!;:()"


class SearchEngine:
    """
    Plain substring search over questions and answers.

    Suggestions are words (at least 4 characters) and short questions
    containing the query, in the order they are found.
    """

    def __init__(
        self,
        entries: list[Entry],
        max_suggestions: int | None = None,
        match_markup: bool | None = None,
    ):
        self.entries = entries
        self.max_suggestions = config.max_suggestions if max_suggestions is None else max_suggestions
        self.match_markup = config.search_match_markup if match_markup is None else match_markup

    @staticmethod
    def tokenize(text: str) -> list[str]:
        """Split text into words, trimming punctuation at the edges."""
        words = (word.strip(_BOUNDARY_PUNCTUATION) for word in text.split())
        return [word for word in words if len(word) >= 2]

    def get_suggestions(self, query: str) -> list[str]:
        """
        Suggest completions for a partial query.

        Args:
            query: Text typed so far; fewer than 2 characters yields nothing

        Returns:
            At most `max_suggestions` unique words or questions
        """
        if not query or len(query) < 2:
            return []

        needle = query.lower()
        suggestions: dict[str, None] = {}

        for entry in self.entries:
            words = self.tokenize(entry.question) + self.tokenize(entry.plain_answer)
            for word in words:
                if len(word) >= 4 and needle in word.lower():
                    suggestions.setdefault(word, None)

            if (
                needle in entry.question.lower()
                and len(entry.question) < config.question_suggestion_max_length
            ):
                suggestions.setdefault(entry.question, None)

            if len(suggestions) >= self.max_suggestions:
                break

        return list(suggestions)[: self.max_suggestions]

    def matches(self, entry: Entry, query: str) -> bool:
        """Case-insensitive substring test against question and answer."""
        needle = query.lower()
        answer = entry.answer if self.match_markup else entry.plain_answer
        return needle in entry.question.lower() or needle in answer.lower()
