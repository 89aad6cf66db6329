from hi5.etl import blocks
from hi5.models import Business, Query


def _query(**kwargs):
    fields = dict(user_name="alice", category="pizza", location="los angeles,ca", radius=8046)
    fields.update(kwargs)
    return Query(**fields)


def _business(name, rating=4.5):
    return Business(
        name=name,
        image_url=f"https://img.example/{name}.jpg",
        url=f"https://www.yelp.com/biz/{name}",
        review_count=42,
        price="$$",
        rating=rating,
        display_address=("1 Main St", "Los Angeles, CA"),
    )


def test_help_text_contains_usage():
    text = blocks.help_text()

    assert text.startswith("*Hi5 helps you find the top 5 rated businesses")
    assert "Usage: /hi5 category=<category>&location=<city,state|zip>&[options]" in text
    assert "```" in text


def test_not_found_payload_single_section():
    payload = blocks.not_found_payload(_query())

    data = payload.to_dict()
    assert data["response_type"] == "in_channel"
    assert len(data["blocks"]) == 1
    assert data["blocks"][0]["type"] == "section"
    assert (
        "Sorry we couldn't find any results for pizza in los angeles,ca. Try increasing your search radius"
        in data["blocks"][0]["text"]["text"]
    )


def test_header_text_with_and_without_term():
    assert blocks.header_text(_query()) == "*Ok @alice here's a Hi-5 for pizza near los angeles,ca*"
    assert blocks.header_text(_query(term="beer")) == "*Ok @alice here's a Hi-5 for pizza and beer near los angeles,ca*"


def test_business_block_format():
    block = blocks.business_block(_business("Slice", rating=4.0)).to_dict()

    assert block["text"]["text"] == (
        "*Slice $$:* 4.0 ⭐ (42 reviews)\n1 Main St Los Angeles, CA\n\nhttps://www.yelp.com/biz/Slice"
    )
    assert block["accessory"] == {
        "type": "image",
        "image_url": "https://img.example/Slice.jpg",
        "alt_text": "alt text",
    }


def test_results_payload_block_count_and_order():
    businesses = [_business("A", 5.0), _business("B", 4.5), _business("C", 4.0)]

    data = blocks.results_payload(_query(), businesses).to_dict()

    assert len(data["blocks"]) == 2 + len(businesses)
    assert data["blocks"][0]["type"] == "section"
    assert "accessory" not in data["blocks"][0]
    assert data["blocks"][1] == {"type": "divider"}
    names = [block["text"]["text"].split(" ")[0] for block in data["blocks"][2:]]
    assert names == ["*A", "*B", "*C"]
    assert all(block["accessory"]["type"] == "image" for block in data["blocks"][2:])
