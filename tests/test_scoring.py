from recommender.scoring import build_haystack, score_product


def test_haystack_joins_title_description_brand(make_product):
    product = make_product(title="Galaxy S10", description="Flagship", brand=None)
    assert build_haystack(product) == "galaxy s10 flagship "


def test_whole_word_keyword_beats_substring_keyword(make_product):
    gaming = make_product(title="Gaming Laptop Pro")
    other = make_product(title="Overlapping Sleeve")

    whole = score_product(gaming, ["gaming"])
    partial = score_product(other, ["lap"])

    assert whole == 6
    assert partial == 2
    assert whole > partial


def test_keyword_matching_is_case_insensitive(make_product):
    assert score_product(make_product(title="iPhone X"), ["IPHONE"]) == 6


def test_empty_keywords_are_skipped(make_product):
    assert score_product(make_product(title="Phone"), ["", "   ", None]) == 0


def test_features_score_substring_only(make_product):
    product = make_product(description="Triple camera with 5G support")
    assert score_product(product, [], ["camera"]) == 4
    assert score_product(product, [], ["cam"]) == 4
    assert score_product(product, [], ["battery"]) == 0


def test_keyword_and_feature_scores_add_up(make_product):
    product = make_product(title="Gaming Phone", description="fast gaming")
    assert score_product(product, ["gaming"], ["gaming"]) == 10


def test_keywords_with_pattern_characters_do_not_raise(make_product):
    product = make_product(title="C++ Primer (5th edition)")
    assert score_product(product, ["c++"]) == 2
    assert score_product(product, ["(5th"]) == 2
    assert score_product(product, ["[unclosed"]) == 0
    assert score_product(product, ["primer"]) == 6


def test_rating_bonus_is_capped(make_product):
    assert score_product(make_product(rating=4)) == 2
    assert score_product(make_product(rating=9)) == 2.5
    assert score_product(make_product(rating=0)) == 0


def test_stock_bonus_only_when_in_stock(make_product):
    assert score_product(make_product(stock=3)) == 0.5
    assert score_product(make_product(stock=0)) == 0
    assert score_product(make_product(stock=None)) == 0


def test_score_does_not_mutate_product(make_product):
    product = make_product(title="Gaming Laptop", rating=4.5, stock=2)
    snapshot = dict(product)
    score_product(product, ["gaming"], ["laptop"])
    assert product == snapshot
