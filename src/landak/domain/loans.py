"""Bank loans, per-round amortization and loan pools."""

from __future__ import annotations

import logging
import math

from landak.domain import ledger
from landak.domain.enums import LoanStatus, RejectReason
from landak.domain.errors import ActionRejected
from landak.domain.government import loan_interest_rate
from landak.domain.models import GameState, Loan, LoanID, LoanPool, Player, PlayerID, PoolID
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


def take_loan(
    state: GameState, borrower: Player, amount: int, turns: int, rules: RulesConfig = DEFAULT_RULES
) -> Loan:
    if amount <= 0:
        raise ActionRejected(RejectReason.INVALID_AMOUNT, "loan amount must be positive")
    if not 1 <= turns <= rules.loans.max_term_turns:
        raise ActionRejected(
            RejectReason.INVALID_AMOUNT,
            f"loan term must be between 1 and {rules.loans.max_term_turns} rounds",
        )

    interest = math.floor(amount * loan_interest_rate(state, rules))
    state.loan_sequence += 1
    loan = Loan(
        id=LoanID(state.loan_sequence),
        borrower_id=borrower.id,
        principal=amount,
        total_interest=interest,
        term_turns=turns,
        turns_remaining=turns,
        per_turn_payment=(amount + interest) // turns,
    )
    state.loans.append(loan)
    ledger.pay_from_bank(state, borrower, amount)
    ledger.log(
        state,
        f"{borrower.name} borrows ${amount} over {turns} rounds (${interest} interest).",
        rules,
    )
    return loan


def find_loan(state: GameState, loan_id: LoanID) -> Loan | None:
    for loan in state.loans:
        if loan.id == loan_id:
            return loan
    return None


def find_pool(state: GameState, pool_id: PoolID) -> LoanPool | None:
    for pool in state.loan_pools:
        if pool.id == pool_id:
            return pool
    return None


def _collect(state: GameState, loan: Loan, payer: Player, amount: int) -> None:
    """Debit ``payer`` and route the money to the bank and pool unit holders."""

    payer.cash -= amount
    loan.amount_repaid += amount
    pool = find_pool(state, loan.pool_id) if loan.pool_id is not None else None
    if pool is None:
        state.bank_balance += amount
        return
    distributed = 0
    for holder_id, units in pool.holdings.items():
        share = amount * units // pool.units_total
        holder = state.player(holder_id)
        if holder is None or not holder.alive or share <= 0:
            continue
        holder.cash += share
        distributed += share
    state.bank_balance += amount - distributed


def default_loans(state: GameState, borrower_id: PlayerID) -> int:
    """Mark every active loan of ``borrower_id`` defaulted; return how many."""

    count = 0
    for loan in state.loans:
        if loan.borrower_id == borrower_id and loan.status == LoanStatus.ACTIVE:
            loan.status = LoanStatus.DEFAULTED
            count += 1
    return count


def amortize(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Charge one instalment on every active loan."""

    for loan in state.loans:
        if loan.status != LoanStatus.ACTIVE:
            continue
        borrower = state.player(loan.borrower_id)
        if borrower is None or not borrower.alive:
            loan.status = LoanStatus.DEFAULTED
            continue

        if loan.turns_remaining <= 1:
            payment = loan.outstanding
        else:
            payment = min(loan.per_turn_payment, loan.outstanding)
        if borrower.cash < payment:
            loan.status = LoanStatus.DEFAULTED
            logger.info("loan %s defaulted by player %s", loan.id, loan.borrower_id)
            ledger.log(state, f"{borrower.name} defaults on loan #{loan.id}.", rules)
            continue

        _collect(state, loan, borrower, payment)
        loan.turns_remaining -= 1
        if loan.turns_remaining <= 0 or loan.outstanding == 0:
            loan.turns_remaining = 0
            loan.status = LoanStatus.PAID
            ledger.log(state, f"{borrower.name} pays off loan #{loan.id}.", rules)


def repay_loan(
    state: GameState, borrower: Player, loan_id: LoanID, rules: RulesConfig = DEFAULT_RULES
) -> None:
    loan = find_loan(state, loan_id)
    if loan is None or loan.borrower_id != borrower.id or loan.status != LoanStatus.ACTIVE:
        raise ActionRejected(
            RejectReason.UNKNOWN_LOAN, f"no active loan {loan_id} for {borrower.name}"
        )
    amount = loan.outstanding
    if borrower.cash < amount:
        raise ActionRejected(RejectReason.INSUFFICIENT_FUNDS, f"{borrower.name} owes ${amount}")
    _collect(state, loan, borrower, amount)
    loan.turns_remaining = 0
    loan.status = LoanStatus.PAID
    ledger.log(state, f"{borrower.name} repays loan #{loan.id} early (${amount}).", rules)


# --- Securitization -------------------------------------------------------------


def create_pool(
    state: GameState, name: str, loan_ids: list[LoanID], rules: RulesConfig = DEFAULT_RULES
) -> LoanPool:
    if not loan_ids or len(set(loan_ids)) != len(loan_ids):
        raise ActionRejected(RejectReason.UNKNOWN_LOAN, "a pool needs distinct loans")
    loans = []
    for loan_id in loan_ids:
        loan = find_loan(state, loan_id)
        if loan is None or loan.status != LoanStatus.ACTIVE or loan.pool_id is not None:
            raise ActionRejected(RejectReason.UNKNOWN_LOAN, f"loan {loan_id} cannot be pooled")
        loans.append(loan)

    state.pool_sequence += 1
    pool = LoanPool(
        id=PoolID(state.pool_sequence),
        name=name,
        loan_ids=list(loan_ids),
        units_total=rules.loans.pool_units,
    )
    for loan in loans:
        loan.pool_id = pool.id
    state.loan_pools.append(pool)
    ledger.log(state, f"The bank securitizes {len(loans)} loans as '{name}'.", rules)
    return pool


def pool_outstanding(state: GameState, pool: LoanPool) -> int:
    total = 0
    for loan_id in pool.loan_ids:
        loan = find_loan(state, loan_id)
        if loan is not None and loan.status == LoanStatus.ACTIVE:
            total += loan.outstanding
    return total


def buy_pool_units(
    state: GameState,
    buyer: Player,
    pool_id: PoolID,
    units: int,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Sell bank-held units to ``buyer``; return the price paid."""

    pool = find_pool(state, pool_id)
    if pool is None:
        raise ActionRejected(RejectReason.UNKNOWN_POOL, f"pool {pool_id} does not exist")
    if units <= 0:
        raise ActionRejected(RejectReason.INVALID_AMOUNT, "units must be positive")
    if units > pool.bank_units:
        raise ActionRejected(
            RejectReason.SUPPLY_EXHAUSTED, f"only {pool.bank_units} units of '{pool.name}' remain"
        )
    cost = math.floor(units * pool_outstanding(state, pool) / pool.units_total)
    if buyer.cash < cost:
        raise ActionRejected(RejectReason.INSUFFICIENT_FUNDS, f"{buyer.name} cannot pay ${cost}")
    ledger.pay_bank(state, buyer, cost)
    pool.holdings[buyer.id] = pool.holdings.get(buyer.id, 0) + units
    ledger.log(state, f"{buyer.name} buys {units} units of '{pool.name}' for ${cost}.", rules)
    return cost
