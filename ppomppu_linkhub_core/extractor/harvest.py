import re
from typing import List, Sequence

from ppomppu_linkhub_core.extractor.models import HarvestedURL
from ppomppu_linkhub_core.fetcher.models import PostBody

NAVERPAY_MARKER = "네이버페이"
NAVERPAY_LABEL = "NPay적립"
# 論壇自家的短網址跳轉
TRACKING_HOSTS = ("s.ppomppu.co.kr",)

_HTTP_URL = re.compile(r"^https?://")


def title_has_marker(title: str, marker: str = NAVERPAY_MARKER) -> bool:
    return marker in title


def _usable(value: str | None, excluded_hosts: Sequence[str]) -> bool:
    if not value or not _HTTP_URL.match(value):
        return False
    return not any(host in value for host in excluded_hosts)


def harvest_urls(body: PostBody, excluded_hosts: Sequence[str] = TRACKING_HOSTS) -> List[str]:
    """收集本文中所有 <a> 的網址

    同一個 <a> 的可見文字與 href 都會檢查，只保留 http(s) 開頭、
    且不屬於跳轉網域的值。結果在單篇文章內去重，保留首次出現的順序。
    """
    found: dict[str, None] = {}
    for anchor in body.anchors():
        text = anchor.text.strip()
        if _usable(text, excluded_hosts):
            found.setdefault(text, None)
        if _usable(anchor.href, excluded_hosts):
            found.setdefault(anchor.href, None)
    return list(found)


def harvest_items(
    body: PostBody,
    post_link: str,
    *,
    label: str = NAVERPAY_LABEL,
    excluded_hosts: Sequence[str] = TRACKING_HOSTS,
) -> List[HarvestedURL]:
    return [
        HarvestedURL(url=url, label=label, post_link=post_link)
        for url in harvest_urls(body, excluded_hosts)
    ]
