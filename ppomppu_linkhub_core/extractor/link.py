from typing import Sequence

from ppomppu_linkhub_core.extractor.models import LinkItem
from ppomppu_linkhub_core.fetcher.models import CandidatePost

DEFAULT_BLOCKLIST = ("sponsor", "consulting")
JJIZZLE_THUMBNAIL = "/icon_app_20160427.png"
JJIZZLE_DESCRIPTION = "{board} - 쥐즐"


def is_blocklisted(link: str, blocklist: Sequence[str] = DEFAULT_BLOCKLIST) -> bool:
    """連結含有任一封鎖字串（贊助、諮詢等）"""
    return any(marker in link for marker in blocklist)


def to_link_item(
    post: CandidatePost,
    board: str,
    *,
    template: str = JJIZZLE_DESCRIPTION,
    thumbnail: str | None = JJIZZLE_THUMBNAIL,
) -> LinkItem:
    """列表頁文章直接轉成 LinkItem，description 由看板顯示名稱帶入範本"""
    return LinkItem(
        url=post.link,
        title=post.title,
        description=template.format(board=board),
        thumbnail=thumbnail,
    )
