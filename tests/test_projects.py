"""Tests for project identity and upsert."""

import hashlib

from ghostly.memory.models import Project
from ghostly.memory.projects import hash_of, project_name, upsert


class TestHashOf:
    def test_deterministic(self):
        assert hash_of("/home/u/app") == hash_of("/home/u/app")

    def test_eight_hex_chars(self):
        h = hash_of("/home/u/app")
        assert len(h) == 8
        int(h, 16)

    def test_md5_prefix(self):
        assert hash_of("/home/u/app") == hashlib.md5(b"/home/u/app").hexdigest()[:8]

    def test_not_normalized(self):
        assert hash_of("/home/u/app") != hash_of("/home/u/app/")

    def test_empty_string(self):
        assert hash_of("") == "d41d8cd9"

    def test_undecodable_path_bytes(self):
        # os.getcwd() decodes non-UTF-8 names with surrogateescape
        assert hash_of("/tmp/caf\udce9") == hashlib.md5(b"/tmp/caf\xe9").hexdigest()[:8]


class TestProjectName:
    def test_last_segment(self):
        assert project_name("/home/u/app") == "app"

    def test_trailing_slash(self):
        assert project_name("/home/u/app/") == ""

    def test_no_separator(self):
        assert project_name("app") == "app"
        assert project_name("") == ""


class TestUpsert:
    def test_creates_project(self):
        project, projects = upsert({}, "/home/u/app", "t1")
        assert project == Project(
            hash=hash_of("/home/u/app"),
            name="app",
            root="/home/u/app",
            first_seen="t1",
            last_seen="t1",
        )
        assert projects == {project.hash: project}

    def test_updates_last_seen_only(self):
        first, projects = upsert({}, "/home/u/app", "t1")
        second, projects = upsert(projects, "/home/u/app", "t2")
        assert len(projects) == 1
        assert second.first_seen == "t1"
        assert second.last_seen == "t2"
        assert second.root == first.root

    def test_does_not_mutate_input(self):
        _, projects = upsert({}, "/home/u/app", "t1")
        before = dict(projects)
        upsert(projects, "/home/u/app", "t2")
        upsert(projects, "/home/u/other", "t2")
        assert projects == before

    def test_preserves_order(self):
        _, projects = upsert({}, "/a", "t1")
        _, projects = upsert(projects, "/b", "t2")
        _, projects = upsert(projects, "/c", "t3")
        _, projects = upsert(projects, "/a", "t4")
        names = [p.name for p in projects.values()]
        assert names == ["a", "b", "c"]

    def test_empty_cwd(self):
        project, _ = upsert({}, "", "t1")
        assert project.name == ""
        assert project.root == ""
