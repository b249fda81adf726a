import pytest
from django.urls import reverse

from wellness.models import Quiz, QuizResult
from wellness.services.quizzes import UNAVAILABLE_MESSAGE, QuizMisconfigured, lookup_rule, score_answers

pytestmark = pytest.mark.django_db

RULES = {
    'low': {'min': 0, 'max': 3, 'message': 'All good'},
    'moderate': {'min': 4, 'max': 6, 'message': 'Keep an eye on it'},
    'high': {'min': 7, 'max': 9, 'message': 'Talk to someone'},
}

QUESTIONS = [
    {'question': 'Q1', 'options': ['Never', 'Sometimes', 'Often', 'Always'], 'scores': [0, 1, 2, 3]},
    {'question': 'Q2', 'options': ['Never', 'Sometimes', 'Often', 'Always'], 'scores': [0, 1, 2, 3]},
    {'question': 'Q3', 'options': ['Never', 'Sometimes', 'Often', 'Always'], 'scores': [0, 1, 2, 3]},
]


@pytest.fixture
def quiz(db):
    return Quiz.objects.create(title='Stress Check', category='stress', questions=QUESTIONS, scoring_rules=RULES)


def test_lookup_rule_bounds_are_inclusive():
    assert lookup_rule(RULES, 0) == ('low', 'All good')
    assert lookup_rule(RULES, 3) == ('low', 'All good')
    assert lookup_rule(RULES, 4) == ('moderate', 'Keep an eye on it')
    assert lookup_rule(RULES, 9) == ('high', 'Talk to someone')


def test_lookup_rule_without_match():
    assert lookup_rule(RULES, 10) == (None, UNAVAILABLE_MESSAGE)
    assert lookup_rule({}, 1) == (None, 'Result unavailable')


def test_lookup_rule_first_declared_band_wins():
    overlapping = {
        'first': {'min': 0, 'max': 5, 'message': 'one'},
        'second': {'min': 3, 'max': 8, 'message': 'two'},
    }
    assert lookup_rule(overlapping, 4) == ('first', 'one')
    assert lookup_rule(overlapping, 6) == ('second', 'two')


def test_lookup_rule_skips_malformed_rules():
    rules = {'broken': {'min': 'abc', 'max': 5}, 'ok': {'min': 0, 'max': 5, 'message': 'fine'}}
    assert lookup_rule(rules, 2) == ('ok', 'fine')


def test_score_answers_sums_option_scores():
    assert score_answers(QUESTIONS, [0, 1, 3]) == 4
    assert score_answers([], []) == 0


@pytest.mark.parametrize('answers', [[0, 1], [0, 1, 2, 3], [0, 1, 4], [0, -1, 2]])
def test_score_answers_rejects_bad_input(answers):
    with pytest.raises(ValueError):
        score_answers(QUESTIONS, answers)


def test_quiz_detail_hides_scores(employee_client, quiz):
    r = employee_client.get(reverse('quiz_detail', args=[quiz.id]))
    assert r.status_code == 200
    assert r.data['data']['questionCount'] == 3
    assert all('scores' not in q for q in r.data['data']['questions'])
    assert r.data['data']['questions'][0]['options'][3] == 'Always'


def test_quiz_detail_not_found(employee_client):
    r = employee_client.get(reverse('quiz_detail', args=[404]))
    assert r.status_code == 404
    assert r.data['detail'] == 'No quiz found.'


def test_submit_scores_and_stores_result(employee, employee_client, quiz):
    r = employee_client.post(reverse('quiz_submit', args=[quiz.id]), {'answers': [2, 2, 1]}, format='json')
    assert r.status_code == 201
    assert r.data['score'] == 5
    assert r.data['resultCategory'] == 'moderate'
    assert r.data['message'] == 'Keep an eye on it'
    result = QuizResult.objects.get(user=employee)
    assert result.answers == [2, 2, 1]
    assert result.recommendations == 'Keep an eye on it'

    history = employee_client.get(reverse('my_quiz_results'))
    assert [h['quizTitle'] for h in history.data['data']] == ['Stress Check']


def test_submit_without_matching_rule(employee_client, quiz):
    quiz.scoring_rules = {'low': {'min': 0, 'max': 2, 'message': 'fine'}}
    quiz.save()
    r = employee_client.post(reverse('quiz_submit', args=[quiz.id]), {'answers': [3, 3, 3]}, format='json')
    assert r.status_code == 201
    assert r.data['resultCategory'] is None
    assert r.data['message'] == 'Result unavailable'


def test_submit_rejects_incomplete_answers(employee_client, quiz):
    r = employee_client.post(reverse('quiz_submit', args=[quiz.id]), {'answers': [1]}, format='json')
    assert r.status_code == 400
    assert not QuizResult.objects.exists()


def test_inactive_quiz_is_hidden_and_closed(employee_client, quiz):
    quiz.is_active = False
    quiz.save()
    assert employee_client.get(reverse('quizzes')).data['data'] == []
    r = employee_client.post(reverse('quiz_submit', args=[quiz.id]), {'answers': [0, 0, 0]}, format='json')
    assert r.status_code == 400


def test_score_answers_keeps_fractional_scores():
    questions = [{'question': 'Q', 'options': ['a', 'b'], 'scores': [0.5, 1.5]}] * 2
    assert score_answers(questions, [0, 1]) == 2
    assert score_answers(questions, [1, 1]) == 3
    assert score_answers(questions, [0, 0]) == 1
    assert score_answers([questions[0]], [0]) == 0.5


@pytest.mark.parametrize('bad', [None, 'abc', 'nan'])
def test_score_answers_flags_broken_scores(bad):
    questions = [{'question': 'Q', 'options': ['a', 'b'], 'scores': [bad, 1]}]
    with pytest.raises(QuizMisconfigured):
        score_answers(questions, [0])
    assert score_answers(questions, [1]) == 1


def test_submit_to_misconfigured_quiz_conflicts(employee_client):
    broken = Quiz.objects.create(
        title='Broken', questions=[{'question': 'Q', 'options': ['a', 'b'], 'scores': [None, 1]}],
        scoring_rules=RULES,
    )
    r = employee_client.post(reverse('quiz_submit', args=[broken.id]), {'answers': [0]}, format='json')
    assert r.status_code == 409
    assert r.data == {'ok': False, 'detail': 'This quiz is misconfigured'}
    assert not QuizResult.objects.exists()


def test_inactive_quiz_detail_visible_to_admins_only(employee_client, counselor_client, quiz):
    quiz.is_active = False
    quiz.save()
    assert employee_client.get(reverse('quiz_detail', args=[quiz.id])).status_code == 404
    r = counselor_client.get(reverse('quiz_detail', args=[quiz.id]))
    assert r.status_code == 200
    assert r.data['data']['isActive'] is False
