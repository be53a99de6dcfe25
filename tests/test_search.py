from tada.models import Item
from tada.search import SearchTerms, find_items, term_matches


def item(text, n=0):
    i = Item.parse(text)
    i.line_number = n
    return i


def test_term_kinds():
    i = item("Call Bob about +Garden @phone", 7)
    assert term_matches("@Phone", i)
    assert term_matches("+garden", i)
    assert term_matches("#7", i)
    assert not term_matches("#8", i)
    assert term_matches("bob", i)
    assert not term_matches("@garden", i)


def test_hash_without_number_is_text():
    assert term_matches("#hashtag", item("post the #hashtag"))


def test_search_terms_match_any():
    terms = SearchTerms(["@home", "dentist"])
    assert terms.item_matches(item("ring the dentist"))
    assert terms.item_matches(item("sweep @home"))
    assert not terms.item_matches(item("buy milk"))


def test_find_items_matches_all():
    a = item("sweep @home +chores")
    b = item("sweep @office")
    c = item("mop @home")
    assert find_items(["@home", "sweep"], [a, b, c]) == [a]
