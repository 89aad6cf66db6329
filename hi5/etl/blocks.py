"""Builders for the Slack messages sent back to the slash command."""

from typing import List, Sequence

from hi5.models import Block, Business, ImageAccessory, MessagePayload, Query, TextObject

IMAGE_ALT_TEXT = "alt text"
CATEGORY_LIST_URL = "https://www.yelp.com/developers/documentation/v3/all_category_list"

HELP_HEADING = (
    "*Hi5 helps you find the top 5 rated businesses in a specified category and location.*\n"
    f"You can find the list of supported categories here: {CATEGORY_LIST_URL}"
)

HELP_USAGE = """Usage: /hi5 category=<category>&location=<city,state|zip>&[options]

Options: key=value
term:   additional search term to narrow your category results
radius: radius in miles for the search area (maximum is 24)

Example: Find top 5 rated pizza places in Los Angeles that serve beer
/hi5 category=pizza&location=los angeles,ca&term=beer&radius=10
"""


def help_text() -> str:
    return f"{HELP_HEADING}\n\n```\n{HELP_USAGE}\n```"


def section(text: str) -> Block:
    return Block(type="section", text=TextObject(text=text))


def divider() -> Block:
    return Block(type="divider")


def not_found_payload(query: Query) -> MessagePayload:
    message = (
        f"*Sorry we couldn't find any results for {query.category} in {query.location}. "
        "Try increasing your search radius*"
    )
    return MessagePayload(blocks=(section(message),))


def header_text(query: Query) -> str:
    message = f"*Ok @{query.user_name} here's a Hi-5 for {query.category}"
    if query.term:
        message = f"{message} and {query.term}"
    return f"{message} near {query.location}*"


def business_block(business: Business) -> Block:
    text = (
        f"*{business.name} {business.price}:* {business.rating:.1f} ⭐ "
        f"({business.review_count} reviews)\n"
        f"{' '.join(business.display_address)}\n\n"
        f"{business.url}"
    )
    return Block(
        type="section",
        text=TextObject(text=text),
        accessory=ImageAccessory(image_url=business.image_url, alt_text=IMAGE_ALT_TEXT),
    )


def results_payload(query: Query, businesses: Sequence[Business]) -> MessagePayload:
    """Header, divider, then one section per business in the order given."""
    blocks: List[Block] = [section(header_text(query)), divider()]
    blocks.extend(business_block(business) for business in businesses)
    return MessagePayload(blocks=tuple(blocks))
