"""Run statistics collected by the reconciliation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from botrecon.domain.model import records as props
from botrecon.domain.reconciliation.normalize import (
    is_falsy,
    is_present,
    is_truthy,
    values_match,
)

if TYPE_CHECKING:
    from botrecon.domain.model import PersonRecord
    from botrecon.domain.reconciliation import ReconciliationPlan


@dataclass(slots=True)
class RunStats:
    processed: int = 0
    modified: int = 0
    delivered: int = 0
    errors: int = 0
    retries: int = 0
    pages: int = 0
    aborted: bool = False

    bots_found: int = 0
    bots_with_names: int = 0
    bots_with_categories: int = 0
    good_bots_already: int = 0
    good_bots_new: int = 0
    bad_bots_already: int = 0
    bad_bots_new: int = 0
    datacenters_already: int = 0
    datacenters_new: int = 0

    initial_addresses_already: int = 0
    initial_addresses_new: int = 0
    latest_addresses_already: int = 0
    latest_addresses_new: int = 0
    nonproxy_addresses_already: int = 0
    nonproxy_addresses_new: int = 0

    read_seconds: float = 0.0
    classify_seconds: float = 0.0
    write_seconds: float = 0.0

    def record(self, record: PersonRecord, plan: ReconciliationPlan) -> None:
        """Account for one planned record."""

        self.processed += 1
        if plan.event is not None:
            self.modified += 1

        state = record.state
        address = record.current_address
        classification = plan.classification
        patch = plan.patch

        if classification.is_bot:
            self.bots_found += 1
            if classification.bot_name:
                self.bots_with_names += 1
            if classification.bot_category:
                self.bots_with_categories += 1
            if classification.is_good_bot:
                if is_truthy(state.is_good_bot):
                    self.good_bots_already += 1
                else:
                    self.good_bots_new += 1
            elif classification.is_good_bot is False:
                if is_truthy(state.is_bot) and is_falsy(state.is_good_bot):
                    self.bad_bots_already += 1
                else:
                    self.bad_bots_new += 1

        if classification.is_datacenter:
            if is_present(state.datacenter):
                self.datacenters_already += 1
            else:
                self.datacenters_new += 1

        if state.initial_address:
            self.initial_addresses_already += 1
        elif props.INITIAL_ADDRESS in patch:
            self.initial_addresses_new += 1

        if address and values_match(address, state.latest_address):
            self.latest_addresses_already += 1
        elif props.LATEST_ADDRESS in patch:
            self.latest_addresses_new += 1

        if address and not classification.is_bot and not classification.is_datacenter:
            if props.LATEST_NONPROXY_ADDRESS in patch:
                self.nonproxy_addresses_new += 1
            else:
                self.nonproxy_addresses_already += 1

    def summary_lines(self) -> list[str]:
        status = "aborted early" if self.aborted else "completed"
        return [
            f"Run {status}: {self.processed} persons processed over {self.pages} pages, "
            f"{self.modified} modified, {self.delivered} delivered",
            f"Good bots: {self.good_bots_already} already tagged, {self.good_bots_new} newly tagged",
            f"Bad bots: {self.bad_bots_already} already tagged, {self.bad_bots_new} newly tagged",
            f"Bots with names: {self.bots_with_names} / {self.bots_found}",
            f"Bots with categories: {self.bots_with_categories} / {self.bots_found}",
            f"Initial addresses: {self.initial_addresses_already} already tagged, "
            f"{self.initial_addresses_new} newly tagged",
            f"Latest addresses: {self.latest_addresses_already} already latest, "
            f"{self.latest_addresses_new} updated",
            f"Non-proxy addresses: {self.nonproxy_addresses_already} already current, "
            f"{self.nonproxy_addresses_new} updated",
            f"Datacenters: {self.datacenters_already} already tagged, "
            f"{self.datacenters_new} newly tagged",
            f"Retries: {self.retries}, errors: {self.errors}",
            f"Read time: {self.read_seconds:.1f}s, processing time: {self.classify_seconds:.1f}s, "
            f"write time: {self.write_seconds:.1f}s",
        ]
