"""
Unit tests for decoding Jira responses and encoding request bodies.
"""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from jirasprint.auth import FieldMapping
from jirasprint.models import (
    IssueFields,
    SearchRequest,
    SearchResponse,
    Sprint,
    SprintIssuesRequest,
    TransitionRequest,
    TransitionsResponse,
)

from tests.factories import make_issue, raw_issue, raw_transition


FIELDS = FieldMapping()


def decode_search(data, fields=FIELDS):
    return SearchResponse.model_validate(data, context={'fields': fields})


class TestSearchResponse:
    """Test decoding of the assigned-issues search"""

    def test_decodes_issue(self):
        sprint = {'id': 5, 'name': 'Sprint 5', 'state': 'active', 'boardId': 3}
        data = {'issues': [raw_issue('ABC-1', points=3, sprints=[sprint], summary='Fix it')]}

        issue = decode_search(data).issues[0]

        assert issue.key == 'ABC-1'
        assert issue.fields.summary == 'Fix it'
        assert issue.fields.status == 'To Do'
        assert issue.fields.issue_type == 'Story'
        assert issue.fields.points == Decimal(3)
        assert issue.fields.sprints == (Sprint(id=5, name='Sprint 5', state='active'),)

    def test_keeps_server_order(self):
        data = {'issues': [raw_issue('B-2'), raw_issue('A-1')]}
        keys = [i.key for i in decode_search(data).issues]
        assert keys == ['B-2', 'A-1']

    def test_null_points_and_sprints(self):
        """Test absent points count as zero and absent sprints as none"""
        issue = decode_search({'issues': [raw_issue()]}).issues[0]
        assert issue.fields.points == Decimal(0)
        assert issue.fields.sprints == ()

    def test_null_status_and_type(self):
        data = {'issues': [{'key': 'A-1', 'fields': {'summary': None, 'issuetype': None, 'status': None}}]}

        fields = decode_search(data).issues[0].fields

        assert (fields.summary, fields.issue_type, fields.status) == ('', '', '')

    def test_fractional_points(self):
        issue = decode_search({'issues': [raw_issue(points=2.5)]}).issues[0]
        assert issue.fields.points == Decimal('2.5')

    def test_custom_field_mapping(self):
        """Test points and sprints are read from the configured field ids"""
        fields = FieldMapping(points='customfield_1', sprints='customfield_2')
        data = {'issues': [{
            'key': 'X-1',
            'fields': {
                'summary': 's',
                'customfield_1': 8,
                'customfield_2': [{'id': 1, 'name': 'S1', 'state': 'closed'}],
            },
        }]}

        issue = decode_search(data, fields).issues[0]

        assert issue.fields.points == 8
        assert issue.fields.sprints[0].name == 'S1'
        assert issue.fields.status == ''

    def test_default_mapping_without_context(self):
        """Test the default field ids apply when no context is given"""
        issue = SearchResponse.model_validate({'issues': [raw_issue(points=5)]}).issues[0]
        assert issue.fields.points == 5

    def test_decoded_values_are_frozen(self):
        issue = decode_search({'issues': [raw_issue()]}).issues[0]
        with pytest.raises(ValidationError):
            issue.key = 'B-2'

    @pytest.mark.parametrize("data", [
        [],
        {},
        {'issues': {}},
        {'issues': [{'fields': {}}]},
        {'issues': [{'key': 'A-1'}]},
        {'issues': [raw_issue(points='three')]},
        {'issues': [raw_issue(points=True)]},
        {'issues': [raw_issue(points=float('inf'))]},
        {'issues': [raw_issue(sprints={'id': 1})]},
        {'issues': [raw_issue(sprints=[{'id': '1', 'name': 'S', 'state': 'active'}])]},
        {'issues': [raw_issue(sprints=[{'id': 1, 'name': 'S'}])]},
        {'issues': [{'key': 'A-1', 'fields': {'status': {'id': '3'}}}]},
    ])
    def test_wrong_shape(self, data):
        with pytest.raises(ValidationError):
            decode_search(data)


class TestIssueFields:
    """Test building domain values directly"""

    def test_keyword_construction(self):
        issue = make_issue(points=2, status='Done', issue_type='Bug')
        assert issue.fields.points == Decimal(2)
        assert issue.fields.status == 'Done'
        assert issue.fields.issue_type == 'Bug'

    def test_defaults(self):
        fields = IssueFields()
        assert fields.points == Decimal(0)
        assert fields.sprints == ()


class TestTransitionsResponse:
    """Test decoding of available transitions"""

    def test_decodes_in_order(self):
        data = {'transitions': [raw_transition('11', 'In Progress'), raw_transition('21', 'Done')]}

        transitions = TransitionsResponse.model_validate(data).transitions

        assert [(t.id, t.to_status) for t in transitions] == [('11', 'In Progress'), ('21', 'Done')]

    def test_missing_target(self):
        with pytest.raises(ValidationError):
            TransitionsResponse.model_validate({'transitions': [{'id': '11', 'name': 'x'}]})


class TestRequestBodies:
    """Test request bodies match the Jira wire format"""

    def test_search_request(self):
        body = SearchRequest(jql='assignee = currentUser()', fields=['summary']).to_dict()
        assert body == {'jql': 'assignee = currentUser()', 'fields': ['summary']}

    def test_transition_request(self):
        assert TransitionRequest('21').to_dict() == {'transition': {'id': '21'}}

    def test_sprint_issues_request(self):
        assert SprintIssuesRequest(['abc-1']).to_dict() == {'issues': ['abc-1']}
