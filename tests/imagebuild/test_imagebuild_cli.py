# tests\imagebuild\test_imagebuild_cli.py
import json
from unittest.mock import patch

from imagebuild.cli import EXIT_BAD_DESCRIPTOR, EXIT_BUILD_FAILED, EXIT_OK, main
from imagebuild.errors import BuildCommandError


class TestCli:

    def test_show_prints_resolved_descriptor(self, capsys):
        assert main(["show"]) == EXIT_OK

        shown = json.loads(capsys.readouterr().out)
        assert shown["from"]["image"] == "eclipse-temurin:21-jre-alpine"
        assert shown["container"]["environment"] == {"SPRING_PROFILES_ACTIVE": "prod"}

    def test_render_to_stdout(self, capsys):
        assert main(["render"]) == EXIT_OK

        out = capsys.readouterr().out
        assert "FROM eclipse-temurin:21-jre-alpine" in out
        assert "USER 1000:1000" in out

    def test_render_to_file(self, tmp_path):
        target = tmp_path / "Dockerfile"

        assert main(["render", "-o", str(target)]) == EXIT_OK
        assert "EXPOSE 8080" in target.read_text()

    def test_descriptor_from_file(self, tmp_path, capsys):
        path = tmp_path / "image.json"
        path.write_text(json.dumps({"to": {"image": "user-service", "tags": ["dev"]}}))

        assert main(["--descriptor", str(path), "build", "--dry-run"]) == EXIT_OK

        out = capsys.readouterr().out
        assert "-t user-service:dev" in out

    def test_descriptor_from_environment(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "image.json"
        path.write_text(json.dumps({"from": {"image": "eclipse-temurin:21-jre"}}))
        monkeypatch.setenv("IMAGEBUILD_DESCRIPTOR", str(path))

        assert main(["render"]) == EXIT_OK
        assert "FROM eclipse-temurin:21-jre\n" in capsys.readouterr().out

    def test_invalid_descriptor_exit_code(self, tmp_path):
        path = tmp_path / "image.json"
        path.write_text(json.dumps({"container": {"user": "root"}}))

        assert main(["--descriptor", str(path), "show"]) == EXIT_BAD_DESCRIPTOR

    def test_build_failure_exit_code(self, tmp_path):
        error = BuildCommandError(["podman", "build"], "boom", 1)
        with patch("imagebuild.cli.build_image", side_effect=error):
            assert main(["build", "--context", str(tmp_path)]) == EXIT_BUILD_FAILED

    def test_missing_build_context_exit_code(self, tmp_path):
        with patch("imagebuild.builder.subprocess.run") as run:
            assert main(["build", "--context", str(tmp_path / "nope")]) == EXIT_BUILD_FAILED

        run.assert_not_called()

    def test_unwritable_render_output_exit_code(self, tmp_path):
        target = tmp_path / "nope" / "Dockerfile"

        assert main(["render", "-o", str(target)]) == EXIT_BUILD_FAILED
        assert not target.exists()
