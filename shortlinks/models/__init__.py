from shortlinks.models.shortened_link import OwnerRef, ShortenedLink


__all__ = [
    'OwnerRef',
    'ShortenedLink',
]
