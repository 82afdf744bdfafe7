import pytest

from estate_admin.services import DeploymentService, DeploymentError


def test_trigger_inserts_an_empty_build_row(backend):
    message = DeploymentService(backend).trigger()

    assert backend.calls == [('insert', 'Build')]
    assert len(backend.tables['Build']) == 1
    assert message.startswith('Deployment successfully triggered!')


def test_permission_errors_get_a_policy_hint(backend):
    backend.fail('insert', 'Build', message='new row violates row-level security policy for table "Build"')

    with pytest.raises(DeploymentError) as exc:
        DeploymentService(backend).trigger()

    assert 'row-level security policy' in exc.value.message
    assert "policy that allows authenticated users to INSERT" in exc.value.message


def test_other_errors_have_no_hint(backend):
    backend.fail('insert', 'Build', message='connection reset')

    with pytest.raises(DeploymentError) as exc:
        DeploymentService(backend).trigger()

    assert exc.value.message == 'An error occurred while triggering the deployment: connection reset'


def test_messages_follow_language(backend):
    message = DeploymentService(backend, lang='te').trigger()
    assert not message.startswith('Deployment successfully triggered!')
