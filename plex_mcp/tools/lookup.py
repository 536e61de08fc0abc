"""Classification of single-item lookup tokens."""

from typing import Union

from ..models.plex import ItemKey, PolymorphicToken, RatingKey, TitleToken

KEY_MARKER = "/library/"


def classify_token(token: Union[int, str, PolymorphicToken]) -> PolymorphicToken:
    """Decide how a caller-supplied token should be looked up.

    Positive whole numbers (or their string form) are rating keys, strings
    containing ``/library/`` are metadata keys, and everything else is a title.
    Tokens that are already classified are returned unchanged.
    """
    if isinstance(token, (RatingKey, ItemKey, TitleToken)):
        return token

    text = str(token).strip()
    if text.isascii() and text.isdigit() and int(text) > 0:
        return RatingKey(value=int(text))
    if KEY_MARKER in text:
        return ItemKey(value=text)
    return TitleToken(value=str(token))
