"""Tests for runners module."""
import pytest
from unittest.mock import patch
from io import StringIO

from pinentry_menu.exceptions import (
    InvalidTemplateException,
    NoRunnerAvailableException,
    UnsupportedRunnerException,
)
from pinentry_menu.runners import (
    RUNNERS,
    ResolvedRunner,
    RunnerSpec,
    build_catalog,
    resolve_runner,
    validate_template,
)


def which_only(*installed):
    """shutil.which replacement finding only the given programs."""
    def which(cmd):
        if cmd in installed:
            return f'/usr/bin/{cmd}'
        return None
    return which


@pytest.mark.unit
class TestCatalog:
    """Tests for the built-in runner catalog."""
    
    def test_builtin_names_in_order(self):
        """Test declaration order is kept."""
        assert list(RUNNERS) == ['rofi', 'wofi', 'fuzzel']
    
    def test_catalog_is_read_only(self):
        """Test catalog cannot be mutated."""
        with pytest.raises(TypeError):
            RUNNERS['evil'] = RunnerSpec('evil', 'evil %s')
    
    def test_builtin_templates_valid(self):
        """Test every built-in template passes validation."""
        for name, spec in RUNNERS.items():
            assert spec.name == name
            validate_template(name, spec.template, spec.placeholders)
    
    def test_program(self):
        """Test program is the first template word."""
        assert RUNNERS['fuzzel'].program == 'fuzzel'


@pytest.mark.unit
class TestValidateTemplate:
    """Tests for validate_template()."""
    
    @pytest.mark.parametrize('template', [
        '',
        ' prog %s',
        'prog %s ',
        'prog  %s',
        'prog',
        'prog %s %s %s',
        '%s --flag',
        'prog %s',
        'prog\t%s',
    ])
    def test_rejects_malformed(self, template):
        """Test malformed templates are rejected."""
        with pytest.raises(InvalidTemplateException):
            validate_template('custom', template)
    
    def test_accepts_two_placeholders(self):
        """Test a well-formed template."""
        validate_template('custom', 'prog --title=%s --text %s')
    
    def test_single_placeholder_when_declared(self):
        """Test a prompt-only template passes only when declared so."""
        validate_template('custom', 'prog --prompt %s', placeholders=1)
        with pytest.raises(InvalidTemplateException):
            validate_template('custom', 'prog --prompt %s %s', placeholders=1)


@pytest.mark.unit
class TestBuildCatalog:
    """Tests for build_catalog()."""
    
    def test_adds_extra_runner(self):
        """Test user runner is appended after built-ins."""
        catalog = build_catalog({'bemenu': 'bemenu -x -p %s --mesg %s'})
        assert list(catalog) == ['rofi', 'wofi', 'fuzzel', 'bemenu']
        assert catalog['bemenu'] == RunnerSpec('bemenu', 'bemenu -x -p %s --mesg %s')
    
    def test_overrides_builtin(self):
        """Test user runner replaces a built-in of the same name."""
        catalog = build_catalog({'rofi': 'rofi -dmenu -p %s -mesg %s'})
        assert catalog['rofi'].template == 'rofi -dmenu -p %s -mesg %s'
        assert list(catalog) == ['rofi', 'wofi', 'fuzzel']
    
    def test_invalid_extra_rejected(self):
        """Test invalid user template is fatal."""
        with pytest.raises(InvalidTemplateException):
            build_catalog({'broken': 'broken'})
    
    def test_user_template_needs_two_placeholders(self):
        """Test user runners must take both prompt and message."""
        with pytest.raises(InvalidTemplateException) as exc_info:
            build_catalog({'wofi': 'wofi --dmenu --prompt %s'})
        assert "expected 2 '%s' placeholders, found 1" in str(exc_info.value)
    
    def test_wofi_is_prompt_only(self):
        """Test wofi is the only built-in without a message slot."""
        assert {name: spec.placeholders for name, spec in RUNNERS.items()} == {
            'rofi': 2, 'wofi': 1, 'fuzzel': 2,
        }
    
    def test_does_not_touch_builtin_catalog(self):
        """Test RUNNERS is unchanged by extras."""
        build_catalog({'bemenu': 'bemenu -p %s --mesg %s'})
        assert 'bemenu' not in RUNNERS


@pytest.mark.unit
class TestResolveRunner:
    """Tests for resolve_runner()."""
    
    @patch('shutil.which')
    def test_requested_installed(self, mock_which):
        """Test requested runner is used when installed."""
        mock_which.side_effect = which_only('rofi', 'fuzzel')
        
        runner = resolve_runner('fuzzel')
        
        assert runner == ResolvedRunner('fuzzel', RUNNERS['fuzzel'].template)
    
    @patch('shutil.which')
    def test_unsupported_request_is_fatal(self, mock_which):
        """Test unknown runner name fails without fallback."""
        mock_which.side_effect = which_only('rofi')
        
        with pytest.raises(UnsupportedRunnerException) as exc_info:
            resolve_runner('dmenu')
        
        assert exc_info.value.runner == 'dmenu'
        assert "requested runner 'dmenu' not supported" in str(exc_info.value)
    
    @patch('shutil.which')
    def test_unsupported_request_checked_before_lookup(self, mock_which):
        """Test no PATH lookup happens for an unknown name."""
        with pytest.raises(UnsupportedRunnerException):
            resolve_runner('dmenu')
        mock_which.assert_not_called()
    
    @patch('shutil.which')
    def test_requested_absent_falls_back(self, mock_which):
        """Test known but missing runner falls back with a warning."""
        mock_which.side_effect = which_only('wofi')
        
        with patch('sys.stderr', new_callable=StringIO) as mock_stderr:
            runner = resolve_runner('rofi')
        
        assert runner.name == 'wofi'
        assert "requested runner 'rofi' not found, falling back" in mock_stderr.getvalue()
    
    @patch('shutil.which')
    def test_requested_absent_none_installed(self, mock_which):
        """Test fallback with nothing installed fails."""
        mock_which.return_value = None
        
        with pytest.raises(NoRunnerAvailableException):
            resolve_runner('rofi')
    
    @patch('shutil.which')
    def test_no_request_uses_first_installed(self, mock_which):
        """Test declaration order decides among installed runners."""
        mock_which.side_effect = which_only('fuzzel', 'wofi')
        
        assert resolve_runner().name == 'wofi'
        assert resolve_runner('').name == 'wofi'
    
    @patch('shutil.which')
    def test_lookup_by_program_name(self, mock_which):
        """Test PATH lookup uses the template's program."""
        mock_which.side_effect = which_only('rofi')
        
        resolve_runner()
        
        mock_which.assert_called_with('rofi')
    
    @patch('shutil.which')
    def test_nothing_installed(self, mock_which):
        """Test no installed runner."""
        mock_which.return_value = None
        
        with pytest.raises(NoRunnerAvailableException):
            resolve_runner()
    
    @patch('shutil.which')
    def test_custom_catalog(self, mock_which):
        """Test resolution against a user catalog."""
        mock_which.side_effect = which_only('bemenu')
        catalog = build_catalog({'menu': 'bemenu -p %s --mesg %s'})
        
        runner = resolve_runner('menu', catalog)
        
        assert runner == ResolvedRunner('menu', 'bemenu -p %s --mesg %s')
