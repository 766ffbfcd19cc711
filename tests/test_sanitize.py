"""Tests for text sanitization and secret masking."""

import shlex

from sonar_prebuild.utils.sanitize import MASK, display_args, mask_arg, mask_secrets, sanitize_text


class TestSanitizeText:
    """Tests for sanitize_text function."""

    def test_sanitize_none(self) -> None:
        """Test sanitize returns None for None input."""
        assert sanitize_text(None) is None

    def test_sanitize_basic(self) -> None:
        """Test basic text passthrough."""
        assert sanitize_text("/k:key") == "/k:key"

    def test_sanitize_removes_control_chars(self) -> None:
        """Test control characters are removed."""
        assert sanitize_text("begin\x00 /k:\x1bkey\r\n") == "begin /k:key"

    def test_sanitize_truncates_when_asked(self) -> None:
        """Test explicit max_length truncates."""
        assert sanitize_text("A" * 30, max_length=10) == "A" * 10 + "..."

    def test_sanitize_no_truncation_by_default(self) -> None:
        """Test long text is kept whole by default."""
        text = "A" * 5000
        assert sanitize_text(text) == text


class TestMaskArg:
    """Tests for mask_arg function."""

    def test_masks_password(self) -> None:
        """Test the whole value after '=' is masked."""
        assert mask_arg("/d:sonar.password=hunter2") == f"/d:sonar.password={MASK}"

    def test_masks_password_with_quote(self) -> None:
        """Test a double quote inside the secret cannot end the masking early."""
        masked = mask_arg('/d:sonar.password=ab"cdSECRET')
        assert masked == f"/d:sonar.password={MASK}"
        assert "SECRET" not in masked

    def test_masks_login_and_jdbc_password(self) -> None:
        """Test login and JDBC password are masked."""
        assert mask_arg("/d:sonar.login=squ_token") == f"/d:sonar.login={MASK}"
        assert mask_arg("/d:sonar.jdbc.password=p w") == f"/d:sonar.jdbc.password={MASK}"

    def test_keeps_jdbc_username(self) -> None:
        """Test JDBC username is not a secret."""
        assert mask_arg("/d:sonar.jdbc.username=sonar") == "/d:sonar.jdbc.username=sonar"

    def test_case_insensitive(self) -> None:
        """Test property names are matched case-insensitively."""
        assert mask_arg("/D:SONAR.PASSWORD=x") == f"/D:SONAR.PASSWORD={MASK}"


class TestMaskSecrets:
    """Tests for mask_secrets and display_args functions."""

    def test_masks_each_element(self) -> None:
        """Test only credential arguments change."""
        args = ["begin", "/k:key", "/d:sonar.login=admin", "/d:sonar.password=s3cret"]
        assert mask_secrets(args) == ["begin", "/k:key", f"/d:sonar.login={MASK}", f"/d:sonar.password={MASK}"]

    def test_does_not_mutate_input(self) -> None:
        """Test the scanner's own argument list is untouched."""
        args = ["/d:sonar.password=s3cret"]
        mask_secrets(args)
        assert args == ["/d:sonar.password=s3cret"]

    def test_display_args_quotes_values(self) -> None:
        """Test display form re-splits into the masked arguments."""
        args = ["begin", "/n:My Project", '/d:sonar.password=a"b c']
        shown = display_args(args)
        assert shlex.split(shown) == ["begin", "/n:My Project", f"/d:sonar.password={MASK}"]

    def test_display_args_not_truncated(self) -> None:
        """Test long command lines are printed whole."""
        long_arg = "/d:sonar.exclusions=" + ",".join(f"dir{i}/**" for i in range(500))
        assert display_args(["begin", long_arg]).endswith("dir499/**'")
