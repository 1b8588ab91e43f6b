from dataclasses import dataclass
from typing import Tuple

from arena_bins.config import DEFAULT_BIN_VALUES
from arena_bins.models import BinTag


@dataclass(frozen=True)
class Bins:
    """
    The two comparison bins. Members keep insertion order; a card name is never
    in both bins at once.
    """
    toxic: Tuple[str, ...] = ()
    spell: Tuple[str, ...] = ()

    def members(self, tag):
        return self.toxic if BinTag(tag) is BinTag.TOXIC else self.spell

    def _with(self, tag, members):
        if BinTag(tag) is BinTag.TOXIC:
            return Bins(toxic=members, spell=self.spell)
        return Bins(toxic=self.toxic, spell=members)

    def __contains__(self, card_name):
        return card_name in self.toxic or card_name in self.spell


def add_to_bin(bins, tag, card_name):
    if not card_name:
        return bins
    tag = BinTag(tag)
    target = bins.members(tag)
    if card_name in target:
        return bins
    other = tuple(n for n in bins.members(tag.other) if n != card_name)
    bins = bins._with(tag.other, other)
    return bins._with(tag, target + (card_name,))


def remove_from_bin(bins, tag, card_name):
    members = bins.members(tag)
    if card_name not in members:
        return bins
    return bins._with(tag, tuple(n for n in members if n != card_name))


def clear_all():
    return Bins()


def seed_bins(catalog):
    """Default bins from each card's catalog classification, in catalog order."""
    bins = Bins()
    for record in catalog:
        tag = DEFAULT_BIN_VALUES.get(record.default_bin)
        if tag:
            bins = add_to_bin(bins, tag, record.card_name)
    return bins


def reset_to_default(catalog):
    return seed_bins(catalog)


def bin_of(bins, card_name):
    if card_name in bins.toxic:
        return BinTag.TOXIC
    if card_name in bins.spell:
        return BinTag.SPELL
    return None


def bin_listing(bins, tag):
    # Display order is alphabetical, unlike the comparison order
    return sorted(bins.members(tag))
