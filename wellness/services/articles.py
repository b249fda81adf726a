from typing import Optional

from wellness.models import Article
from wellness.services.formatting import format_category, format_date, iso


def serialize_article(a: Article, *, with_content: bool = False) -> dict:
    data = {
        'id': a.id,
        'title': a.title,
        'summary': a.summary,
        'category': a.category,
        'categoryLabel': format_category(a.category),
        'author': a.author,
        'imageUrl': a.image_url or None,
        'createdAt': iso(a.created_at),
        'createdAtLabel': format_date(a.created_at),
    }
    if with_content:
        data['content'] = a.content
    return data


def list_published(category: Optional[str] = None) -> list[dict]:
    qs = Article.objects.filter(is_published=True)
    if category:
        qs = qs.filter(category=category)
    return [serialize_article(a) for a in qs.order_by('-created_at', '-id')]


def get_article(article_id: int, *, include_unpublished: bool = False) -> Article:
    qs = Article.objects.all() if include_unpublished else Article.objects.filter(is_published=True)
    article = qs.filter(id=article_id).first()
    if article is None:
        raise LookupError('Article not found')
    return article
