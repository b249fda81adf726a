from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from wellness.permissions import is_admin_user
from wellness.services import articles as svc


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def articles(request):
    """Published articles, newest first, optionally filtered by ``category``."""
    category = (request.query_params.get('category') or '').strip() or None
    return Response({'ok': True, 'data': svc.list_published(category)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def article_detail(request, pk: int):
    try:
        article = svc.get_article(pk, include_unpublished=is_admin_user(request.user))
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response({'ok': True, 'data': svc.serialize_article(article, with_content=True)})
