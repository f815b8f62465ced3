"""Localized display strings for the API responses."""

from undercover.rules import DEFAULT_LANGUAGE, TIE, Feedback, Role

FEEDBACK_TEXT = {
    "en": {
        Feedback.TIE_REVOTE: "Tie! Vote again.",
        Feedback.PERSISTENT_TIE: "Tie continues!",
    },
    "fr": {
        Feedback.TIE_REVOTE: "Égalité ! Nouveau vote.",
        Feedback.PERSISTENT_TIE: "Égalité persistante !",
    },
}

VICTORY_TEXT = {
    "en": {
        Role.CIVIL: "The Butter Cookies win!",
        Role.UNDERCOVER: "The Buttercovers win!",
        Role.MR_WHITE: "The Creamery Lady found the word and wins!",
        TIE: "It's a draw!",
    },
    "fr": {
        Role.CIVIL: "Les Petits Beurres gagnent !",
        Role.UNDERCOVER: "Les Buttercovers gagnent !",
        Role.MR_WHITE: "La Crémière a trouvé le mot et gagne !",
        TIE: "Égalité !",
    },
}


def _table(tables: dict, language: str) -> dict:
    return tables.get(language) or tables[DEFAULT_LANGUAGE]


def feedback_text(feedback: Feedback | None, language: str) -> str | None:
    if feedback is None:
        return None
    return _table(FEEDBACK_TEXT, language)[feedback]


def victory_text(role: Role | str, language: str) -> str:
    return _table(VICTORY_TEXT, language).get(role, "")
