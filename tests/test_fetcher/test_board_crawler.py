import pytest

from conftest import FakeRenderer, coupon_listing, jjizzle_listing, post_page
from ppomppu_linkhub_core.abc.crawler_abc import ACCEPT_LANGUAGE, USER_AGENTS
from ppomppu_linkhub_core.fetcher.crawler import BoardCrawler
from ppomppu_linkhub_core.fetcher.models import (
    COUPON_LISTING,
    HARVEST_BODY,
    JJIZZLE_LISTING,
    QUIZ_BODY,
    CandidatePost,
    PostBody,
    absolutize,
)

LIST_URL = "https://www.ppomppu.co.kr/zboard/zboard.php?id=coupon"


@pytest.mark.parametrize("href, expected", [
    ("/zboard/view.php?id=phone&no=1", "https://www.ppomppu.co.kr/zboard/view.php?id=phone&no=1"),
    ("view.php?id=coupon&no=2", "https://www.ppomppu.co.kr/zboard/view.php?id=coupon&no=2"),
    ("https://www.ppomppu.co.kr/zboard/view.php?no=3", "https://www.ppomppu.co.kr/zboard/view.php?no=3"),
])
def test_absolutize(href, expected):
    assert absolutize(href) == expected


@pytest.mark.asyncio
async def test_list_candidates_jjizzle_rows():
    html = jjizzle_listing([
        ("  갤럭시 후기  ", "/zboard/view.php?id=phone&no=1"),
        ("적금 정리", "view.php?id=money&no=2"),
    ])
    renderer = FakeRenderer({LIST_URL: html})
    posts = await BoardCrawler(renderer).list_candidates(LIST_URL, JJIZZLE_LISTING)
    assert posts == [
        CandidatePost(title="갤럭시 후기", link="https://www.ppomppu.co.kr/zboard/view.php?id=phone&no=1"),
        CandidatePost(title="적금 정리", link="https://www.ppomppu.co.kr/zboard/view.php?id=money&no=2"),
    ]


@pytest.mark.asyncio
async def test_list_candidates_coupon_rows_skip_header_and_incomplete_rows():
    html = coupon_listing([("[네이버페이] 1원", "view.php?id=coupon&no=10")])
    html = html.replace("</table>", '<tr><td class="baseList-space title"><a><span>링크없음</span></a></td></tr></table>')
    renderer = FakeRenderer({LIST_URL: html})
    posts = await BoardCrawler(renderer).list_candidates(LIST_URL, COUPON_LISTING)
    assert [p.title for p in posts] == ["[네이버페이] 1원"]


@pytest.mark.asyncio
async def test_request_headers_are_randomized_user_agent_and_korean_language():
    renderer = FakeRenderer({LIST_URL: coupon_listing([])})
    await BoardCrawler(renderer).list_candidates(LIST_URL, COUPON_LISTING)
    _, user_agent, headers = renderer.calls[0]
    assert user_agent in USER_AGENTS
    assert headers["Accept-Language"] == ACCEPT_LANGUAGE


@pytest.mark.asyncio
async def test_page_load_failure_returns_empty_list():
    renderer = FakeRenderer(failing=[LIST_URL])
    assert await BoardCrawler(renderer).list_candidates(LIST_URL, COUPON_LISTING) == []


@pytest.mark.asyncio
async def test_fetch_body_tries_selectors_in_order():
    url = "https://www.ppomppu.co.kr/zboard/view.php?id=coupon&no=5"
    page = '<html><body><td class="board-contents">   </td><div id="readArea">정답: 사과</div></body></html>'
    renderer = FakeRenderer({url: page})
    body = await BoardCrawler(renderer).fetch_body(url, QUIZ_BODY)
    assert body is not None
    assert body.selector == "#readArea"
    assert "사과" in body.text


@pytest.mark.asyncio
async def test_fetch_body_absent_when_no_selector_matches():
    url = "https://www.ppomppu.co.kr/zboard/view.php?id=coupon&no=6"
    renderer = FakeRenderer({url: "<html><body><p>삭제된 글</p></body></html>"})
    assert await BoardCrawler(renderer).fetch_body(url, HARVEST_BODY) is None


@pytest.mark.asyncio
async def test_fetch_body_absent_on_load_failure():
    url = "https://www.ppomppu.co.kr/zboard/view.php?id=coupon&no=7"
    renderer = FakeRenderer(failing=[url])
    assert await BoardCrawler(renderer).fetch_body(url, HARVEST_BODY) is None


def test_post_body_text_keeps_line_breaks():
    body = PostBody(selector="td.board-contents", html="정답입니다.\n정답: 사과\n<b>다음</b>")
    assert body.text == "정답입니다.\n정답: 사과\n다음"


def test_post_body_anchors():
    body = PostBody(
        selector="td.board-contents",
        html=post_page('<a href="https://a.example">https://a.example</a><a>text only</a>'),
    )
    anchors = body.anchors()
    assert [(a.text, a.href) for a in anchors] == [
        ("https://a.example", "https://a.example"),
        ("text only", None),
    ]
