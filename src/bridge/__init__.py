"""Contract bridge engine (duplicate rules): deal, auction, play, scoring."""

__version__ = "0.1.0"

from .seats import Seat, Side, SEATS, next_seat, partner, side_of
from .deck import Card, Suit, make_deck_52, parse_card, shuffle_deck, sort_hand
from .deal import (
    Deal,
    Vulnerability,
    deal_hands,
    shuffle_and_deal,
    dealer_for_board,
    vulnerability_for_board,
)
from .bidding import (
    Bid,
    Call,
    CallKind,
    Contract,
    Strain,
    PASS,
    DOUBLE,
    REDOUBLE,
    make_bid,
    parse_call,
    validate_call,
    determine_contract,
)
from .play import Trick, legal_plays, trick_winner, validate_play
from .scoring import ScoringResult, score_contract
from .config import EngineConfig, load_config, save_config
from .errors import BridgeError, ProtocolError, LegalityError, InvariantViolation
from .game import (
    GameState,
    Phase,
    PlayCard,
    deal_board,
    apply_call,
    apply_play,
    finalize_score,
    complete_board,
    submit,
    legal_calls,
    legal_cards,
    default_action,
)
from .table import BoardTable, EventSink
