"""Tests for pendinfo/seekinfo parsing."""

from freechess.protocol.enums import Direction, IdListKind, OfferTag
from freechess.protocol.fields import InvalidField
from freechess.protocol.offers import (
    GenericOffer,
    IdList,
    MatchOffer,
    SeekAd,
    SeekCleared,
    parse_offer_line,
    parse_offer_lines,
    title_name,
)


class TestSeekAds:
    def test_seek_line(self) -> None:
        ad = parse_offer_line(
            "<s> 5 w=bob ti=0 rt=1900 t=5 i=0 r=u tp=blitz c=? rr=0-9999 a=t f=f"
        )
        assert isinstance(ad, SeekAd)
        assert ad.tag == OfferTag.SEEK
        assert ad.id == 5
        assert ad.user == "bob"
        assert ad.title == ""
        assert ad.rating == "1900"
        assert ad.initial_time == 5
        assert ad.increment == 0
        assert ad.rated_unrated == "u"
        assert ad.category == "blitz"
        assert ad.color == "?"
        assert ad.rating_range == "0-9999"
        assert ad.automatic is True
        assert ad.formula is False

    def test_new_seek_with_title_and_provisional_rating(self) -> None:
        ad = parse_offer_line(
            "<sn> 17 w=magnus ti=4 rt=0P t=3 i=2 r=r tp=lightning c=W rr=1500-2500 a=f f=t"
        )
        assert isinstance(ad, SeekAd)
        assert ad.tag == OfferTag.SEEK_NEW
        assert ad.title == "GM"
        assert ad.rating == ""
        assert ad.formula is True

    def test_seek_cleared(self) -> None:
        assert parse_offer_line("<sc>") == SeekCleared()


class TestPendingOffers:
    def test_match_offer_from_opponent(self) -> None:
        offer = parse_offer_line(
            "<pf> 12 w=Newton t=match p=Newton (1500) [white] me (1600) rated blitz 5 0"
        )
        assert isinstance(offer, MatchOffer)
        assert offer.direction == Direction.FROM
        assert offer.counterpart == "Newton"
        assert (offer.player, offer.player_rating) == ("me", "1600")
        assert (offer.opponent, offer.opponent_rating) == ("Newton", "1500")
        assert offer.color == "white"
        assert offer.rated_unrated == "rated"
        assert offer.category == "blitz"
        assert (offer.initial_time, offer.increment) == (5, 0)
        assert offer.adjourned is False

    def test_match_offer_to_opponent(self) -> None:
        offer = parse_offer_line(
            "<pt> 3 w=Einstein t=match p=me ( 1700) Einstein (----) unrated standard 15 5"
        )
        assert isinstance(offer, MatchOffer)
        assert offer.direction == Direction.TO
        assert (offer.player, offer.player_rating) == ("me", "1700")
        assert (offer.opponent, offer.opponent_rating) == ("Einstein", "----")
        assert offer.color is None

    def test_adjourned_match_loaded_from_variant(self) -> None:
        offer = parse_offer_line(
            "<pf> 4 w=Newton t=match p=Newton (1500) me (1600) rated wild 2 12"
            " Loaded from wild/fr (adjourned)"
        )
        assert isinstance(offer, MatchOffer)
        assert offer.category == "wild/fr"
        assert offer.adjourned is True

    def test_generic_offer(self) -> None:
        offer = parse_offer_line("<pf> 8 w=Newton t=draw p=#")
        assert isinstance(offer, GenericOffer)
        assert offer.subtype == "draw"
        assert offer.raw_params == "#"
        assert offer.direction == Direction.FROM


class TestRemovals:
    def test_pending_removed(self) -> None:
        assert parse_offer_line("<pr> 12 13") == IdList(
            tag=OfferTag.PENDING_REMOVED, kind=IdListKind.PENDING_REMOVED, ids=(12, 13)
        )

    def test_seek_removed_with_bad_id(self) -> None:
        record = parse_offer_line("<sr> 5 x7")
        assert isinstance(record, IdList)
        assert record.kind == IdListKind.SEEK_REMOVED
        assert record.ids == (5, InvalidField("x7"))


class TestBlocks:
    def test_unmatched_lines_are_dropped(self) -> None:
        offers = parse_offer_lines("<sc>\n<s> broken line\nrandom chatter\n<sr> 9")
        assert len(offers) == 2
        assert isinstance(offers[0], SeekCleared)
        assert isinstance(offers[1], IdList)

    def test_unknown_title_code(self) -> None:
        assert title_name(3) == ""
        assert title_name(0x80) == "WFM"
