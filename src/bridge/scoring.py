"""
Duplicate bridge scoring.

Made contracts: trick score (× 2 doubled, × 4 redoubled) + overtricks +
game or partscore bonus + slam bonus + the bonus for making a doubled or
redoubled contract. Failed contracts: undertrick penalty to the defenders.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .bidding import Contract, Strain
from .deal import Vulnerability
from .errors import InvalidTrickCount
from .seats import Side, side_of

PARTSCORE_BONUS = 50
GAME_THRESHOLD = 100
GAME_BONUS_NONVUL = 300
GAME_BONUS_VUL = 500
SMALL_SLAM_NONVUL = 500
SMALL_SLAM_VUL = 750
GRAND_SLAM_NONVUL = 1000
GRAND_SLAM_VUL = 1500
DOUBLED_MADE_BONUS = 50
REDOUBLED_MADE_BONUS = 100

UNDOUBLED_UNDERTRICK_NONVUL = 50
UNDOUBLED_UNDERTRICK_VUL = 100


@dataclass(frozen=True)
class ScoreBreakdown:
    trick_score: int = 0
    overtrick_bonus: int = 0
    game_bonus: int = 0
    slam_bonus: int = 0
    insult_bonus: int = 0
    penalty: int = 0

    @property
    def total_made(self) -> int:
        return (
            self.trick_score
            + self.overtrick_bonus
            + self.game_bonus
            + self.slam_bonus
            + self.insult_bonus
        )


@dataclass(frozen=True)
class ScoringResult:
    """Points per side. At most one side scores on any board."""

    ns: int
    ew: int
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)
    declaring_side: Side | None = None
    tricks_won: int = 0
    made: bool = False
    overtricks: int = 0
    undertricks: int = 0
    passed_out: bool = False

    def score_for(self, side: Side) -> int:
        return self.ns if side is Side.NS else self.ew

    @property
    def winning_side(self) -> Side | None:
        if self.ns > self.ew:
            return Side.NS
        if self.ew > self.ns:
            return Side.EW
        return None


PASSED_OUT_RESULT = ScoringResult(ns=0, ew=0, passed_out=True)


def base_trick_points(level: int, strain: Strain) -> int:
    """Undoubled trick score for the contracted tricks."""
    if strain is Strain.NOTRUMP:
        return 40 + 30 * (level - 1)
    if strain.is_major:
        return 30 * level
    return 20 * level


def overtrick_value(contract: Contract, vulnerable: bool) -> int:
    if contract.redoubled:
        return 400 if vulnerable else 200
    if contract.doubled:
        return 200 if vulnerable else 100
    return 20 if contract.strain.is_minor else 30


def undertrick_penalty(down: int, contract: Contract, vulnerable: bool) -> int:
    """
    Undoubled: 50 / 100 per trick. Doubled: 1st 100 / 200, 2nd and 3rd
    200 / 300 each, 4th and later 300 each. Redoubled: twice the doubled total.
    """
    if down <= 0:
        return 0
    if not contract.doubled and not contract.redoubled:
        per = UNDOUBLED_UNDERTRICK_VUL if vulnerable else UNDOUBLED_UNDERTRICK_NONVUL
        return down * per
    penalty = 0
    for i in range(down):
        if i == 0:
            penalty += 200 if vulnerable else 100
        elif i <= 2:
            penalty += 300 if vulnerable else 200
        else:
            penalty += 300
    if contract.redoubled:
        penalty *= 2
    return penalty


def score_contract(
    contract: Contract,
    tricks_won: int,
    vulnerability: Vulnerability,
) -> ScoringResult:
    """
    Score one board. ``tricks_won`` is the declaring side's trick count (0..13).
    """
    if not 0 <= tricks_won <= 13:
        raise InvalidTrickCount(f"tricks_won must be 0..13, got {tricks_won}")
    side = side_of(contract.declarer)
    vulnerable = vulnerability.for_side(side)
    over = tricks_won - contract.tricks_required

    if over >= 0:
        base = base_trick_points(contract.level, contract.strain)
        if contract.redoubled:
            trick_score = base * 4
        elif contract.doubled:
            trick_score = base * 2
        else:
            trick_score = base

        if trick_score < GAME_THRESHOLD:
            game_bonus = PARTSCORE_BONUS
        else:
            game_bonus = GAME_BONUS_VUL if vulnerable else GAME_BONUS_NONVUL

        if contract.level == 6:
            slam_bonus = SMALL_SLAM_VUL if vulnerable else SMALL_SLAM_NONVUL
        elif contract.level == 7:
            slam_bonus = GRAND_SLAM_VUL if vulnerable else GRAND_SLAM_NONVUL
        else:
            slam_bonus = 0

        if contract.redoubled:
            insult = REDOUBLED_MADE_BONUS
        elif contract.doubled:
            insult = DOUBLED_MADE_BONUS
        else:
            insult = 0

        breakdown = ScoreBreakdown(
            trick_score=trick_score,
            overtrick_bonus=over * overtrick_value(contract, vulnerable),
            game_bonus=game_bonus,
            slam_bonus=slam_bonus,
            insult_bonus=insult,
        )
        total = breakdown.total_made
        ns, ew = (total, 0) if side is Side.NS else (0, total)
        return ScoringResult(
            ns=ns,
            ew=ew,
            breakdown=breakdown,
            declaring_side=side,
            tricks_won=tricks_won,
            made=True,
            overtricks=over,
        )

    down = -over
    penalty = undertrick_penalty(down, contract, vulnerable)
    breakdown = ScoreBreakdown(penalty=penalty)
    ns, ew = (0, penalty) if side is Side.NS else (penalty, 0)
    return ScoringResult(
        ns=ns,
        ew=ew,
        breakdown=breakdown,
        declaring_side=side,
        tricks_won=tricks_won,
        made=False,
        undertricks=down,
    )


__all__ = [
    "ScoreBreakdown",
    "ScoringResult",
    "PASSED_OUT_RESULT",
    "base_trick_points",
    "overtrick_value",
    "undertrick_penalty",
    "score_contract",
]
