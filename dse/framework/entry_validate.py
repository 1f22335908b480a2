"""Integrity checks for a built manifest.

The builder itself trusts its callers; these checks catch the mistakes
that are easy to make when editing action definitions by hand (a data
field without a placeholder, placeholders out of order, ids outside the
plugin's namespaces).
"""

import re

from dse.framework.entry_builder import placeholder_token

_UNRESOLVED_RE = re.compile(r"{[0-9]+}")
_TOKEN_RE = re.compile(r"{\$(.+?)\$}")


def _check_format(kind, entity, problems):
    expected = [placeholder_token(f) for f in entity.data]
    found = ["{$%s$}" % t for t in _TOKEN_RE.findall(entity.format)]
    if found != expected:
        problems.append(
            "%s %s: format placeholders %r do not match data fields %r"
            % (kind, entity.id, found, expected))
    unresolved = _UNRESOLVED_RE.findall(entity.format)
    if unresolved:
        problems.append("%s %s: unresolved placeholders %s"
                        % (kind, entity.id, ", ".join(unresolved)))


def _check_fields(kind, entity, field_prefix, problems):
    for f in entity.data:
        if not f.id.startswith(field_prefix):
            problems.append("%s %s: data field %s is not under %s"
                            % (kind, entity.id, f.id, field_prefix))


def validate_manifest(document):
    """Return a list of problems found in ``document`` (empty when sound)."""
    problems = []
    pid = document.id
    act_prefix = "%s.act." % pid
    conn_prefix = "%s.conn." % pid
    cat_prefix = "%s.cat." % pid

    seen_categories = set()
    seen_actions = set()
    seen_connectors = set()

    for cat in document.categories:
        if cat.id in seen_categories:
            problems.append("Duplicate category id %s" % cat.id)
        seen_categories.add(cat.id)
        if not cat.id.startswith(cat_prefix):
            problems.append("Category %s is not under %s"
                            % (cat.id, cat_prefix))
        if cat.events:
            problems.append("Category %s declares events" % cat.id)

        for action in cat.actions:
            if action.id in seen_actions:
                problems.append("Duplicate action id %s" % action.id)
            seen_actions.add(action.id)
            if not action.id.startswith(act_prefix):
                problems.append("Action %s is not under %s"
                                % (action.id, act_prefix))
            _check_format("Action", action, problems)
            _check_fields("Action", action, act_prefix, problems)

        for conn in cat.connectors:
            if conn.id in seen_connectors:
                problems.append("Duplicate connector id %s" % conn.id)
            seen_connectors.add(conn.id)
            if not conn.id.startswith(conn_prefix):
                problems.append("Connector %s is not under %s"
                                % (conn.id, conn_prefix))
            _check_format("Connector", conn, problems)
            _check_fields("Connector", conn, act_prefix, problems)

    return problems
