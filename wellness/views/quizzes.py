from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from wellness.models import Quiz
from wellness.permissions import is_admin_user
from wellness.serializers.quizzes import QuizSubmitSerializer
from wellness.services import quizzes as svc


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quizzes(request):
    return Response({'ok': True, 'data': svc.list_active()})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quiz_detail(request, pk: int):
    qs = Quiz.objects.all() if is_admin_user(request.user) else Quiz.objects.filter(is_active=True)
    quiz = qs.filter(id=pk).first()
    if quiz is None:
        return Response({'ok': False, 'detail': 'No quiz found.'}, status=status.HTTP_404_NOT_FOUND)
    return Response({'ok': True, 'data': svc.serialize_quiz(quiz, with_questions=True)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def quiz_submit(request, pk: int):
    """Score the chosen option indices and store the result."""
    s = QuizSubmitSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        result, outcome = svc.submit(request.user, pk, s.validated_data['answers'])
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except svc.QuizMisconfigured as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_409_CONFLICT)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    return Response({
        'ok': True,
        'score': outcome.score,
        'resultCategory': outcome.category,
        'message': outcome.message,
        'result': svc.serialize_result(result),
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_quiz_results(request):
    return Response({'ok': True, 'data': svc.list_results(request.user)})
