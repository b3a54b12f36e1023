"""
Board orchestration: deal → auction → play → score.

Every transition takes a GameState and returns a new one; nothing is mutated
in place, so a rejected action (any raised BridgeError) leaves the caller's
state exactly as it was. The engine never broadcasts or persists: ``submit``
returns the new state together with events describing what changed, and the
surrounding service decides what to do with them.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple, Sequence, Union

from .bidding import (
    PASS,
    Auction,
    AuctionStatus,
    Call,
    Contract,
    apply_call as _apply_auction_call,
    auction_status,
    determine_contract,
    legal_calls as _legal_calls,
    seat_to_call,
)
from .config import DEFAULT_CONFIG, EngineConfig
from .deal import Vulnerability, dealer_for_board, deal_hands, vulnerability_for_board
from .deck import Card, make_deck_52, shuffle_deck, sort_hand
from .errors import CardConservationError, InconsistentState, MalformedCall, OutOfTurn, WrongPhase
from .play import EMPTY_TRICK, Trick, legal_plays, trick_winner, validate_play
from .scoring import PASSED_OUT_RESULT, ScoringResult, score_contract
from .seats import SEATS, Seat, Side, check_seat, next_seat, side_of

logger = logging.getLogger(__name__)

TRICKS_PER_BOARD = 13


class Phase(str, Enum):
    INITIALIZING = "INITIALIZING"
    BIDDING = "BIDDING"
    PLAYING = "PLAYING"
    SCORING = "SCORING"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class GameState:
    """Everything about one board. Treat as a value: transitions return copies."""

    board_number: int
    dealer: Seat
    vulnerability: Vulnerability
    deck: tuple[Card, ...]
    hands: Mapping[Seat, frozenset[Card]]
    phase: Phase = Phase.INITIALIZING
    auction: Auction = ()
    contract: Contract | None = None
    current_trick: Trick = EMPTY_TRICK
    tricks: tuple[Trick, ...] = ()
    turn: Seat | None = None
    result: ScoringResult | None = None
    config: EngineConfig = field(default=DEFAULT_CONFIG)

    def __post_init__(self) -> None:
        # Read-only copy, never shared with the state this one was derived from.
        hands = {check_seat(seat): frozenset(cards) for seat, cards in self.hands.items()}
        object.__setattr__(self, "hands", MappingProxyType(hands))

    def hand(self, seat: Seat) -> frozenset[Card]:
        return self.hands[seat]

    def sorted_hand(self, seat: Seat) -> list[Card]:
        return sort_hand(self.hands[seat], self.config.hand_sort_suits)

    @property
    def auction_status(self) -> AuctionStatus:
        return auction_status(self.auction)

    @property
    def declaring_side(self) -> Side | None:
        if self.contract is None:
            return None
        return side_of(self.contract.declarer)

    @property
    def is_passed_out(self) -> bool:
        return self.phase is Phase.COMPLETED and self.contract is None

    @property
    def opening_lead_made(self) -> bool:
        return bool(self.tricks) or bool(self.current_trick.plays)

    def tricks_won(self, side: Side) -> int:
        return sum(1 for t in self.tricks if t.winner is not None and side_of(t.winner) is side)

    def played_cards(self) -> list[Card]:
        cards = [c for t in self.tricks for c in t.cards]
        cards.extend(self.current_trick.cards)
        return cards


@dataclass(frozen=True)
class PlayCard:
    """The single play action."""
    card: Card

    def __post_init__(self) -> None:
        if not isinstance(self.card, Card):
            raise MalformedCall(f"Not a card: {self.card!r}")


Action = Union[Call, PlayCard]


# ---- Events: what a transition changed ----

@dataclass(frozen=True)
class CallMade:
    seat: Seat
    call: Call


@dataclass(frozen=True)
class AuctionClosed:
    # None when the board was passed out
    contract: Contract | None


@dataclass(frozen=True)
class CardPlayed:
    seat: Seat
    card: Card
    played_by: Seat


@dataclass(frozen=True)
class TrickCompleted:
    number: int
    winner: Seat


@dataclass(frozen=True)
class HandCompleted:
    ns_tricks: int
    ew_tricks: int


@dataclass(frozen=True)
class BoardScored:
    result: ScoringResult


Event = Union[CallMade, AuctionClosed, CardPlayed, TrickCompleted, HandCompleted, BoardScored]


class Transition(NamedTuple):
    state: GameState
    events: tuple[Event, ...]


# ---- Setup ----

def deal_board(
    board_number: int,
    rng_seed: int | None = None,
    *,
    deck: Sequence[Card] | None = None,
    config: EngineConfig | None = None,
) -> GameState:
    """
    Create a board ready for the auction (INITIALIZING -> BIDDING).
    With ``deck`` the given shuffled pack is dealt as-is (replays, audits).
    """
    cfg = config or DEFAULT_CONFIG
    dealer = dealer_for_board(board_number)
    vul = vulnerability_for_board(board_number, cfg.vulnerability_cycle)
    if deck is None:
        rng = random.Random(rng_seed)
        deck = shuffle_deck(make_deck_52(), rng)
    dealt = deal_hands(deck)
    state = GameState(
        board_number=board_number,
        dealer=dealer,
        vulnerability=vul,
        deck=dealt.deck,
        hands={seat: frozenset(dealt.hands[seat]) for seat in SEATS},
        config=cfg,
    )
    logger.info(
        "Dealt board %d: dealer %s, vulnerable %s",
        board_number,
        dealer.name,
        vul.label,
    )
    return replace(state, phase=Phase.BIDDING, turn=dealer)


# ---- Auction ----

def apply_call(state: GameState, seat: Seat, call: Call) -> GameState:
    """Validate and apply one call. Raises an auction error on rejection."""
    seat = check_seat(seat)
    if state.phase is not Phase.BIDDING:
        raise WrongPhase(f"Cannot call during {state.phase.value}")
    auction = _apply_auction_call(state.auction, state.dealer, seat, call)
    logger.debug("Board %d: %s calls %s", state.board_number, seat.name, call)

    status = auction_status(auction)
    if not status.complete:
        return replace(state, auction=auction, turn=seat_to_call(auction, state.dealer))

    contract = determine_contract(auction)
    if contract is None:
        logger.info("Board %d passed out", state.board_number)
        return replace(
            state,
            auction=auction,
            phase=Phase.COMPLETED,
            turn=None,
            result=PASSED_OUT_RESULT,
        )
    logger.info("Board %d: contract %s", state.board_number, contract)
    return replace(
        state,
        auction=auction,
        contract=contract,
        phase=Phase.PLAYING,
        turn=contract.opening_leader,
    )


def legal_calls(state: GameState) -> list[Call]:
    if state.phase is not Phase.BIDDING:
        return []
    return _legal_calls(state.auction, state.dealer)


# ---- Play ----

def may_act_for(state: GameState, seat: Seat, on_turn: Seat) -> bool:
    """True if ``seat`` may submit the play for the seat on turn."""
    if seat == on_turn:
        return True
    contract = state.contract
    return (
        contract is not None
        and state.config.declarer_plays_dummy
        and on_turn == contract.dummy
        and seat == contract.declarer
    )


def apply_play(state: GameState, seat: Seat, card: Card) -> GameState:
    """Validate and apply one card. Raises a play error on rejection."""
    seat = check_seat(seat)
    if state.phase is not Phase.PLAYING:
        raise WrongPhase(f"Cannot play a card during {state.phase.value}")
    if state.contract is None or state.turn is None:
        raise InconsistentState(
            f"Board {state.board_number} is PLAYING without a contract or a seat on turn"
        )
    on_turn = state.turn
    if not may_act_for(state, seat, on_turn):
        raise OutOfTurn(f"It is {on_turn.name}'s turn to play, not {seat.name}'s")

    hand = state.hands[on_turn]
    validate_play(card, hand, state.current_trick)

    hands = dict(state.hands)
    hands[on_turn] = hand - {card}
    trick = state.current_trick.with_play(on_turn, card)
    logger.debug("Board %d: %s plays %s", state.board_number, on_turn.name, card)

    if not trick.is_complete:
        return replace(state, hands=hands, current_trick=trick, turn=next_seat(on_turn))

    winner = trick_winner(trick, state.contract.trump)
    tricks = state.tricks + (replace(trick, winner=winner),)
    if len(tricks) < TRICKS_PER_BOARD:
        return replace(
            state,
            hands=hands,
            current_trick=EMPTY_TRICK,
            tricks=tricks,
            turn=winner,
        )

    done = replace(
        state,
        hands=hands,
        current_trick=EMPTY_TRICK,
        tricks=tricks,
        turn=None,
        phase=Phase.SCORING,
    )
    logger.info(
        "Board %d: play complete, NS %d tricks, EW %d tricks",
        state.board_number,
        done.tricks_won(Side.NS),
        done.tricks_won(Side.EW),
    )
    return done


def legal_cards(state: GameState) -> list[Card]:
    """Cards the seat on turn may play."""
    if state.phase is not Phase.PLAYING or state.turn is None:
        return []
    return legal_plays(state.hands[state.turn], state.current_trick)


# ---- Scoring ----

def finalize_score(state: GameState) -> ScoringResult:
    """Score a finished board. Pure: the same state always gives the same result."""
    if state.phase is Phase.COMPLETED and state.contract is None:
        return PASSED_OUT_RESULT
    if state.phase not in (Phase.SCORING, Phase.COMPLETED):
        raise WrongPhase(f"Cannot score during {state.phase.value}")
    if state.contract is None:
        raise InconsistentState(f"Board {state.board_number} is {state.phase.value} without a contract")
    side = side_of(state.contract.declarer)
    return score_contract(state.contract, state.tricks_won(side), state.vulnerability)


def complete_board(state: GameState) -> GameState:
    """Record the score (SCORING -> COMPLETED)."""
    if state.phase is not Phase.SCORING:
        raise WrongPhase(f"Cannot complete a board during {state.phase.value}")
    result = finalize_score(state)
    logger.info(
        "Board %d scored: NS %d, EW %d",
        state.board_number,
        result.ns,
        result.ew,
    )
    return replace(state, phase=Phase.COMPLETED, result=result)


# ---- Dispatch ----

def submit(state: GameState, seat: Seat, action: Action) -> Transition:
    """Apply a call or a card and describe the change."""
    seat = check_seat(seat)
    if isinstance(action, Call):
        new = apply_call(state, seat, action)
        events: list[Event] = [CallMade(seat, action)]
        if new.phase is not Phase.BIDDING:
            events.append(AuctionClosed(new.contract))
        return Transition(new, tuple(events))

    if isinstance(action, PlayCard):
        on_turn = state.turn
        new = apply_play(state, seat, action.card)
        events = [CardPlayed(on_turn, action.card, seat)]
        if len(new.tricks) > len(state.tricks):
            events.append(TrickCompleted(len(new.tricks), new.tricks[-1].winner))
        if new.phase is Phase.SCORING:
            events.append(HandCompleted(new.tricks_won(Side.NS), new.tricks_won(Side.EW)))
        return Transition(new, tuple(events))

    raise MalformedCall(f"Unknown action: {action!r}")


def score_board(state: GameState) -> Transition:
    """complete_board plus the BoardScored event."""
    new = complete_board(state)
    return Transition(new, (BoardScored(new.result),))


def default_action(state: GameState) -> Action:
    """
    Synthetic action for a seat whose clock ran out: Pass in the auction,
    the lowest legal card in play.
    """
    if state.phase is Phase.BIDDING:
        return PASS
    if state.phase is Phase.PLAYING:
        cards = legal_cards(state)
        return PlayCard(min(cards, key=lambda c: (c.rank, int(c.suit))))
    raise WrongPhase(f"No action is due during {state.phase.value}")


# ---- Views and checks ----

def visible_hands(state: GameState, viewer: Seat) -> dict[Seat, frozenset[Card]]:
    """The viewer's own hand, plus dummy's once the opening lead is on the table."""
    visible = {viewer: state.hands[viewer]}
    if state.contract is not None and state.opening_lead_made:
        dummy = state.contract.dummy
        visible[dummy] = state.hands[dummy]
    return visible


def check_card_conservation(state: GameState) -> None:
    """Hands plus played cards must be exactly the dealt deck, each card once."""
    held = [c for seat in SEATS for c in state.hands[seat]]
    everything = held + state.played_cards()
    if len(everything) != 52 or set(everything) != set(state.deck):
        raise CardConservationError(
            f"Board {state.board_number}: {len(everything)} cards accounted for, "
            f"{len(set(everything))} distinct"
        )


__all__ = [
    "Phase",
    "GameState",
    "PlayCard",
    "Action",
    "CallMade",
    "AuctionClosed",
    "CardPlayed",
    "TrickCompleted",
    "HandCompleted",
    "BoardScored",
    "Event",
    "Transition",
    "TRICKS_PER_BOARD",
    "deal_board",
    "apply_call",
    "legal_calls",
    "may_act_for",
    "apply_play",
    "legal_cards",
    "finalize_score",
    "complete_board",
    "submit",
    "score_board",
    "default_action",
    "visible_hands",
    "check_card_conservation",
]
