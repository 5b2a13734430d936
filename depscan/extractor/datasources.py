"""Datasource identifiers stamped onto extracted dependencies.

The extractors never talk to these services; the identifiers tell the
update planner where to look up available versions.
"""

POD = "pod"
GIT_TAGS = "git-tags"
GITHUB_TAGS = "github-tags"
GITLAB_TAGS = "gitlab-tags"
GITHUB_RELEASES = "github-releases"
NPM = "npm"
DOCKER = "docker"
RUBY_VERSION = "ruby-version"
CONAN = "conan"
