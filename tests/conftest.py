"""Shared test fixtures: sample diffs and temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def sample_diff_simple() -> str:
    """One file, one hunk, one line replaced."""
    return textwrap.dedent("""\
        diff --git a/sample b/sample
        index 0000001..0ddf2ba
        --- a/sample
        +++ b/sample
        @@ -1 +1 @@
        -test
        +test1r
    """)


@pytest.fixture
def sample_diff_new_file() -> str:
    """A git diff that adds a new file."""
    return textwrap.dedent("""\
        diff --git a/hello.py b/hello.py
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/hello.py
        @@ -0,0 +1,3 @@
        +def greet(name):
        +    return f"Hello, {name}!"
        +
    """)


@pytest.fixture
def sample_diff_deleted_file() -> str:
    return textwrap.dedent("""\
        diff --git a/old.txt b/old.txt
        deleted file mode 100644
        index 2b2d7f1..0000000
        --- a/old.txt
        +++ /dev/null
        @@ -1,2 +0,0 @@
        -first
        -second
    """)


@pytest.fixture
def sample_diff_multi_file() -> str:
    """Two files, the second with two hunks."""
    return textwrap.dedent("""\
        diff --git a/src/app.py b/src/app.py
        index 1234567..abcdef0 100644
        --- a/src/app.py
        +++ b/src/app.py
        @@ -1,3 +1,3 @@
         import os
        -print("hello")
        +print("hello world")
         os.exit(0)
        diff --git a/README.md b/README.md
        index 89abcde..fedcba9 100644
        --- a/README.md
        +++ b/README.md
        @@ -1,2 +1,3 @@
         # Title
        +Some intro.
         text
        @@ -10,2 +11,2 @@ Section
        -old footer
        +new footer
         end
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    """A pure rename with no content change."""
    return textwrap.dedent("""\
        diff --git a/old.txt b/new.txt
        similarity index 95%
        rename from old.txt
        rename to new.txt
    """)


@pytest.fixture
def sample_diff_rename_with_changes() -> str:
    """A rename followed by an explicit ---/+++/@@ triplet."""
    return textwrap.dedent("""\
        diff --git a/lib/old_name.py b/lib/new_name.py
        similarity index 87%
        rename from lib/old_name.py
        rename to lib/new_name.py
        index abc1234..def5678 100644
        --- a/lib/old_name.py
        +++ b/lib/new_name.py
        @@ -1,2 +1,2 @@
         x = 1
        -y = 2
        +y = 3
    """)


@pytest.fixture
def sample_diff_copy() -> str:
    return textwrap.dedent("""\
        diff --git a/base.cfg b/copy.cfg
        similarity index 100%
        copy from base.cfg
        copy to copy.cfg
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    """A git diff adding a binary file."""
    return textwrap.dedent("""\
        diff --git a/image.png b/image.png
        new file mode 100644
        index 0000000..d1e2f3a
        Binary files /dev/null and b/image.png differ
    """)


@pytest.fixture
def sample_diff_git_binary_patch() -> str:
    return textwrap.dedent("""\
        diff --git a/logo.gif b/logo.gif
        index 1111111..2222222 100644
        GIT binary patch
        literal 10
        RcmZ?wbhEHbWMKdS
    """)


@pytest.fixture
def sample_diff_combined() -> str:
    """A combined diff from a merge commit."""
    return textwrap.dedent("""\
        diff --combined describe.c
        index fabadb8,cc95eb0..4866510
        --- a/describe.c
        +++ b/describe.c
        @@@ -98 -98 +98 @@@
          return (a_date > b_date) ? -1 : (a_date == b_date) ? 0 : 1;
          }
        - static void describe(char *arg)
         -static void describe(struct commit *cmit, int last_one)
        ++static void describe(char *arg, int last_one)
          {
    """)


@pytest.fixture
def sample_diff_mode_change() -> str:
    return textwrap.dedent("""\
        diff --git a/script.sh b/script.sh
        old mode 100644
        new mode 100755
    """)


@pytest.fixture
def sample_diff_unified() -> str:
    """Plain ``diff -u`` output with timestamps, no git headers."""
    return textwrap.dedent("""\
        --- sample.js\t2016-10-25 11:37:14.000000000 +0200
        +++ sample.js\t2016-10-25 11:37:14.000000000 +0200
        @@ -1 +1,2 @@
        -test
        +test1
        +test2
    """)


@pytest.fixture
def sample_diff_no_newline() -> str:
    """A diff with 'No newline at end of file' marker."""
    return textwrap.dedent("""\
        diff --git a/data.txt b/data.txt
        index 0000000..abc1234
        --- a/data.txt
        +++ b/data.txt
        @@ -1 +1 @@
        -final line
        \\ No newline at end of file
        +final line changed
        \\ No newline at end of file
    """)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    # Initial commit
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
