"""Protocol layer: raw server text in, typed events out."""

from freechess.protocol.classifier import classify
from freechess.protocol.decoder import (
    DecodeResult,
    Decoder,
    DecoderState,
    DecoderStateError,
    decode,
)
from freechess.protocol.enums import (
    Direction,
    GameResult,
    IdListKind,
    LoginPromptKind,
    MailKind,
    OfferTag,
    ReasonCode,
    UtteranceKind,
)
from freechess.protocol.events import (
    BoardUpdate,
    ChannelTell,
    Event,
    GameEnd,
    GameStart,
    HoldingsUpdate,
    LoginPrompt,
    LoginResult,
    MailBlock,
    MailEntry,
    MoveTiming,
    OfferBlock,
    PlainText,
    PrivateTell,
    RoomUtterance,
    SeekRemoved,
    VerboseMove,
)
from freechess.protocol.fields import InvalidField
from freechess.protocol.offers import (
    GenericOffer,
    IdList,
    MatchOffer,
    OfferRecord,
    SeekAd,
    SeekCleared,
)
from freechess.protocol.results import classify_game_result, game_result_from_score

__all__ = [
    # Decoding
    "DecodeResult",
    "Decoder",
    "DecoderState",
    "DecoderStateError",
    "classify",
    "decode",
    # Enums
    "Direction",
    "GameResult",
    "IdListKind",
    "LoginPromptKind",
    "MailKind",
    "OfferTag",
    "ReasonCode",
    "UtteranceKind",
    # Events
    "BoardUpdate",
    "ChannelTell",
    "Event",
    "GameEnd",
    "GameStart",
    "HoldingsUpdate",
    "LoginPrompt",
    "LoginResult",
    "MailBlock",
    "MailEntry",
    "MoveTiming",
    "OfferBlock",
    "PlainText",
    "PrivateTell",
    "RoomUtterance",
    "SeekRemoved",
    "VerboseMove",
    # Offers
    "GenericOffer",
    "IdList",
    "MatchOffer",
    "OfferRecord",
    "SeekAd",
    "SeekCleared",
    # Fields / results
    "InvalidField",
    "classify_game_result",
    "game_result_from_score",
]
