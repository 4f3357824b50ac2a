# tests\imagebuild\test_descriptor.py
import json
from datetime import datetime, timezone

import pytest

from imagebuild.descriptor import (
    CREATED_LABEL,
    EPOCH_TIME,
    ImageBuildDescriptor,
    load_descriptor,
    parse_descriptor,
)
from imagebuild.errors import DescriptorError

NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class TestDefaults:

    def test_base_image_and_platforms(self):
        descriptor = ImageBuildDescriptor()
        assert descriptor.from_.image == "eclipse-temurin:21-jre-alpine"
        assert descriptor.platform_specs() == ["linux/arm64"]

    def test_container_defaults(self):
        container = ImageBuildDescriptor().container
        assert container.ports == ["8080"]
        assert container.environment == {"SPRING_PROFILES_ACTIVE": "prod"}
        assert container.user == "1000:1000"
        assert container.jvm_flags == [
            "-server",
            "-Xms512m",
            "-Xmx1024m",
            "-XX:+UseG1GC",
            "-XX:+UseContainerSupport",
        ]

    def test_version_dependent_defaults(self):
        descriptor = ImageBuildDescriptor(version="1.2.3")
        assert descriptor.to.tags == ["latest", "1.2.3"]
        assert descriptor.container.labels == {
            "maintainer": "otus-hw",
            "version": "1.2.3",
            "description": "Spring Boot application built with Jib",
        }
        assert descriptor.image_references() == ["jib-gradle-app:latest", "jib-gradle-app:1.2.3"]

    def test_client_and_extra_directories(self):
        descriptor = ImageBuildDescriptor()
        assert descriptor.docker_client.executable == "podman"
        assert [(d.source, d.into) for d in descriptor.extra_directories] == [("src/main/jib", "/app")]

    def test_entrypoint_runs_jar_with_jvm_flags(self):
        entrypoint = ImageBuildDescriptor().container.entrypoint()
        assert entrypoint[0] == "java"
        assert entrypoint[-2:] == ["-jar", "/app/app.jar"]
        assert "-XX:+UseContainerSupport" in entrypoint


class TestCreationTime:

    def test_current_timestamp_uses_now(self):
        assert ImageBuildDescriptor().resolve_creation_time(NOW) == NOW

    def test_epoch(self):
        descriptor = parse_descriptor({"container": {"creation_time": "EPOCH"}})
        assert descriptor.resolve_creation_time(NOW) == EPOCH_TIME

    def test_explicit_timestamp(self):
        descriptor = parse_descriptor({"container": {"creation_time": "2023-05-06T07:08:09Z"}})
        assert descriptor.resolve_creation_time(NOW) == datetime(2023, 5, 6, 7, 8, 9, tzinfo=timezone.utc)

    def test_created_label(self):
        labels = ImageBuildDescriptor().resolved_labels(NOW)
        assert labels[CREATED_LABEL] == "2024-01-02T03:04:05Z"
        assert labels["maintainer"] == "otus-hw"


class TestValidation:

    @pytest.mark.parametrize("ports", [["8080"], ["8000-8010"], ["53/udp"], ["1", "65535/tcp"]])
    def test_valid_ports(self, ports):
        assert parse_descriptor({"container": {"ports": ports}}).container.ports == ports

    @pytest.mark.parametrize("port", ["0", "70000", "http", "9000-8000", "8080/sctp"])
    def test_invalid_ports(self, port):
        with pytest.raises(DescriptorError, match="port"):
            parse_descriptor({"container": {"ports": [port]}})

    @pytest.mark.parametrize("user", ["0", "0:0", "root", "root:wheel"])
    def test_root_user_rejected(self, user):
        with pytest.raises(DescriptorError, match="root"):
            parse_descriptor({"container": {"user": user}})

    @pytest.mark.parametrize("user", ["1000", "1000:1000", "app", "app:app"])
    def test_non_root_users_accepted(self, user):
        assert parse_descriptor({"container": {"user": user}}).container.user == user

    @pytest.mark.parametrize("version", ["1.0 beta", "1.0:rc", ""])
    def test_bad_version(self, version):
        with pytest.raises(DescriptorError, match="version"):
            parse_descriptor({"version": version})

    def test_version_checked_even_with_explicit_tags(self):
        with pytest.raises(DescriptorError, match="version"):
            parse_descriptor({"version": "1.0 beta:rc", "to": {"tags": ["stable"]}})

    def test_invalid_environment_key(self):
        with pytest.raises(DescriptorError, match="environment"):
            parse_descriptor({"container": {"environment": {"BAD-KEY": "x"}}})

    def test_platforms_must_not_be_empty(self):
        with pytest.raises(DescriptorError, match="platform"):
            parse_descriptor({"from": {"platforms": []}})

    def test_bad_creation_time(self):
        with pytest.raises(DescriptorError, match="creation_time"):
            parse_descriptor({"container": {"creation_time": "yesterday"}})

    def test_relative_extra_directory_target(self):
        with pytest.raises(DescriptorError, match="absolute"):
            parse_descriptor({"extra_directories": [{"from": "conf", "into": "app/conf"}]})

    @pytest.mark.parametrize("tags", [[], ["has space"], ["a:b"]])
    def test_bad_tags(self, tags):
        with pytest.raises(DescriptorError):
            parse_descriptor({"to": {"tags": tags}})

    def test_top_level_must_be_object(self):
        with pytest.raises(DescriptorError, match="JSON object"):
            parse_descriptor(["not", "a", "dict"])


class TestLoadDescriptor:

    def test_no_path_gives_defaults(self):
        assert load_descriptor(None) == ImageBuildDescriptor()

    def test_partial_override_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "image.json"
        path.write_text(json.dumps({
            "from": {"platforms": [{"architecture": "arm64"}, {"architecture": "amd64"}]},
            "to": {"image": "user-service"},
        }))

        descriptor = load_descriptor(path)

        assert descriptor.platform_specs() == ["linux/arm64", "linux/amd64"]
        assert descriptor.to.image == "user-service"
        assert descriptor.from_.image == "eclipse-temurin:21-jre-alpine"
        assert descriptor.container.ports == ["8080"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(DescriptorError, match="cannot read"):
            load_descriptor(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "image.json"
        path.write_text("{not json")

        with pytest.raises(DescriptorError, match="not valid JSON"):
            load_descriptor(path)

    def test_json_round_trip_uses_from_alias(self):
        dumped = json.loads(ImageBuildDescriptor().to_json())
        assert "from" in dumped
        assert dumped["extra_directories"][0]["from"] == "src/main/jib"
        assert parse_descriptor(dumped) == ImageBuildDescriptor()
