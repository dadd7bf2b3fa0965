from shortlinks.dao.base.shortened_link_base_dao import ShortenedLinkBaseDAO


__all__ = [
    'ShortenedLinkBaseDAO',
]
