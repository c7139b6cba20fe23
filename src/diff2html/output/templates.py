"""Jinja2 template registry for the HTML renderers.

Templates live in this module and are loaded through a ``DictLoader``. The
environment is built once on first use and only read afterwards, so
renderers on different threads can share it. Autoescaping is off: renderers
escape diff content themselves, and file names are escaped in the templates
with ``|e``.
"""

from __future__ import annotations

import functools
from typing import Any, Dict

from jinja2 import DictLoader, Environment, StrictUndefined, Template

_TEMPLATES: Dict[str, str] = {
    "generic-wrapper": """\
<div class="d2h-wrapper {{ colorScheme }}">
    {{ content }}
</div>""",
    "file-summary-wrapper": """\
<div class="d2h-file-list-wrapper {{ colorScheme }}">
    <div class="d2h-file-list-header">
        <span class="d2h-file-list-title">Files changed ({{ filesNumber }})</span>
        <a class="d2h-file-switch d2h-hide">hide</a>
        <a class="d2h-file-switch d2h-show">show</a>
    </div>
    <ol class="d2h-file-list">
    {{ files }}
    </ol>
</div>""",
    "file-summary-line": """\
<li class="d2h-file-list-line">
    <span class="d2h-file-name-wrapper">
        {{ fileIcon }}
        <a href="#{{ fileHtmlId }}" class="d2h-file-name">{{ fileName|e }}</a>
        <span class="d2h-file-stats">
            <span class="d2h-lines-added">{{ addedLines }}</span>
            <span class="d2h-lines-deleted">{{ deletedLines }}</span>
        </span>
    </span>
</li>""",
    "line-by-line-file-diff": """\
<div id="{{ fileHtmlId }}" class="d2h-file-wrapper" data-lang="{{ language|e }}">
    <div class="d2h-file-header">
    {{ filePath }}
    </div>
    <div class="d2h-file-diff">
        <div class="d2h-code-wrapper">
            <table class="d2h-diff-table">
                <tbody class="d2h-diff-tbody">
                {{ diffs }}
                </tbody>
            </table>
        </div>
    </div>
</div>""",
    "side-by-side-file-diff": """\
<div id="{{ fileHtmlId }}" class="d2h-file-wrapper" data-lang="{{ language|e }}">
    <div class="d2h-file-header">
      {{ filePath }}
    </div>
    <div class="d2h-files-diff">
        <div class="d2h-file-side-diff">
            <div class="d2h-code-wrapper">
                <table class="d2h-diff-table">
                    <tbody class="d2h-diff-tbody">
                    {{ left }}
                    </tbody>
                </table>
            </div>
        </div>
        <div class="d2h-file-side-diff">
            <div class="d2h-code-wrapper">
                <table class="d2h-diff-table">
                    <tbody class="d2h-diff-tbody">
                    {{ right }}
                    </tbody>
                </table>
            </div>
        </div>
    </div>
</div>""",
    "generic-file-path": """\
<span class="d2h-file-name-wrapper">
    {{ fileIcon }}
    <span class="d2h-file-name">{{ fileDiffName|e }}</span>
    {{ fileTag }}
</span>
<label class="d2h-file-collapse">
    <input class="d2h-file-collapse-input" type="checkbox" name="viewed" value="viewed">
    Viewed
</label>""",
    "generic-line": """\
<tr>
    <td class="{{ lineClass }} {{ type }}">
      {{ lineNumber }}
    </td>
    <td class="{{ type }}">
        <div class="{{ contentClass }}">
        {%- if prefix %}
            <span class="d2h-code-line-prefix">{{ prefix }}</span>
        {%- else %}
            <span class="d2h-code-line-prefix">&nbsp;</span>
        {%- endif %}
        {%- if content %}
            <span class="d2h-code-line-ctn">{{ content }}</span>
        {%- else %}
            <span class="d2h-code-line-ctn"><br></span>
        {%- endif %}
        </div>
    </td>
</tr>""",
    "line-by-line-numbers": """\
<div class="line-num1">{{ oldNumber }}</div>
<div class="line-num2">{{ newNumber }}</div>""",
    "generic-block-header": """\
<tr>
    <td class="{{ lineClass }} {{ infoClass }}"></td>
    <td class="{{ infoClass }}">
        <div class="{{ contentClass }}">{% if blockHeader %}{{ blockHeader }}{% else %}&nbsp;{% endif %}</div>
    </td>
</tr>""",
    "generic-empty-diff": """\
<tr>
    <td class="{{ infoClass }}">
        <div class="{{ contentClass }}">
            File without changes
        </div>
    </td>
</tr>""",
    "icon-file-added": (
        '<svg aria-hidden="true" class="d2h-icon d2h-added" height="16" title="added" '
        'version="1.1" viewBox="0 0 14 16" width="14"><path d="M13 1H1C0.45 1 0 1.45 0 2v12'
        "c0 0.55 0.45 1 1 1h12c0.55 0 1-0.45 1-1V2c0-0.55-0.45-1-1-1z m0 13H1V2h12v12zM6 9H3V7"
        'h3V4h2v3h3v2H8v3H6V9z"></path></svg>'
    ),
    "icon-file-changed": (
        '<svg aria-hidden="true" class="d2h-icon d2h-changed" height="16" title="modified" '
        'version="1.1" viewBox="0 0 14 16" width="14"><path d="M13 1H1C0.45 1 0 1.45 0 2v12'
        "c0 0.55 0.45 1 1 1h12c0.55 0 1-0.45 1-1V2c0-0.55-0.45-1-1-1z m0 13H1V2h12v12zM4 8c0-1.66 "
        '1.34-3 3-3s3 1.34 3 3-1.34 3-3 3-3-1.34-3-3z"></path></svg>'
    ),
    "icon-file-deleted": (
        '<svg aria-hidden="true" class="d2h-icon d2h-deleted" height="16" title="removed" '
        'version="1.1" viewBox="0 0 14 16" width="14"><path d="M13 1H1C0.45 1 0 1.45 0 2v12'
        "c0 0.55 0.45 1 1 1h12c0.55 0 1-0.45 1-1V2c0-0.55-0.45-1-1-1z m0 13H1V2h12v12zM11 9H3V7"
        'h8v2z"></path></svg>'
    ),
    "icon-file-renamed": (
        '<svg aria-hidden="true" class="d2h-icon d2h-moved" height="16" title="renamed" '
        'version="1.1" viewBox="0 0 14 16" width="14"><path d="M6 9H3V7h3V4l5 4-5 4V9z m8-7v12'
        'c0 0.55-0.45 1-1 1H1c-0.55 0-1-0.45-1-1V2c0-0.55 0.45-1 1-1h12c0.55 0 1 0.45 1 1z m-1 0'
        'H1v12h12V2z"></path></svg>'
    ),
    "tag-file-added": '<span class="d2h-tag d2h-added d2h-added-tag">ADDED</span>',
    "tag-file-changed": '<span class="d2h-tag d2h-changed d2h-changed-tag">CHANGED</span>',
    "tag-file-deleted": '<span class="d2h-tag d2h-deleted d2h-deleted-tag">DELETED</span>',
    "tag-file-renamed": '<span class="d2h-tag d2h-moved d2h-moved-tag">RENAMED</span>',
}

TEMPLATE_NAMES = tuple(_TEMPLATES)


@functools.lru_cache(maxsize=None)
def get_environment() -> Environment:
    """Return the process-wide template environment, building it on first call."""
    return Environment(
        loader=DictLoader(_TEMPLATES),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=False,
    )


def get_template(name: str) -> Template:
    return get_environment().get_template(name)


def render(name: str, **context: Any) -> str:
    """Render template *name*; a missing variable raises ``UndefinedError``."""
    return get_template(name).render(**context)


CSS = """\
:host,
:root {
  --d2h-bg-color: #fff;
  --d2h-border-color: #ddd;
  --d2h-dim-color: rgba(0, 0, 0, 0.3);
  --d2h-line-border-color: #eee;
  --d2h-file-header-bg-color: #f7f7f7;
  --d2h-file-header-border-color: #d8d8d8;
  --d2h-empty-placeholder-bg-color: #f1f1f1;
  --d2h-empty-placeholder-border-color: #e1e1e1;
  --d2h-selected-color: #c8e1ff;
  --d2h-ins-bg-color: #dfd;
  --d2h-ins-border-color: #b4e2b4;
  --d2h-ins-highlight-bg-color: #97f295;
  --d2h-ins-label-color: #399839;
  --d2h-del-bg-color: #fee8e9;
  --d2h-del-border-color: #e9aeae;
  --d2h-del-highlight-bg-color: #ffb6ba;
  --d2h-del-label-color: #c33;
  --d2h-change-del-color: #fdf2d0;
  --d2h-change-ins-color: #ded;
  --d2h-info-bg-color: #f8fafd;
  --d2h-info-border-color: #d5e4f2;
  --d2h-change-label-color: #d0b44c;
  --d2h-moved-label-color: #3572b0;
  --d2h-light-color: #333;
  --d2h-dark-color: #e6edf3;
  --d2h-dark-bg-color: #0d1117;
  --d2h-dark-border-color: #30363d;
  --d2h-dark-dim-color: #6e7681;
  --d2h-dark-line-border-color: #21262d;
  --d2h-dark-file-header-bg-color: #161b22;
  --d2h-dark-empty-placeholder-bg-color: hsla(215, 8%, 47%, 0.1);
  --d2h-dark-ins-bg-color: rgba(46, 160, 67, 0.15);
  --d2h-dark-ins-highlight-bg-color: rgba(46, 160, 67, 0.4);
  --d2h-dark-del-bg-color: rgba(248, 81, 73, 0.1);
  --d2h-dark-del-highlight-bg-color: rgba(248, 81, 73, 0.4);
  --d2h-dark-info-bg-color: rgba(56, 139, 253, 0.1);
}
.d2h-wrapper {
  text-align: left;
}
.d2h-file-header {
  background-color: var(--d2h-file-header-bg-color);
  border-bottom: 1px solid var(--d2h-file-header-border-color);
  display: flex;
  font-family: Source Sans Pro, Helvetica Neue, Helvetica, Arial, sans-serif;
  height: 35px;
  padding: 5px 10px;
}
.d2h-file-header.d2h-sticky-header {
  position: sticky;
  top: 0;
  z-index: 1;
}
.d2h-file-stats {
  display: flex;
  font-size: 14px;
  margin-left: auto;
}
.d2h-lines-added {
  border: 1px solid var(--d2h-ins-border-color);
  border-radius: 5px 0 0 5px;
  color: var(--d2h-ins-label-color);
  padding: 2px;
  text-align: right;
  vertical-align: middle;
}
.d2h-lines-deleted {
  border: 1px solid var(--d2h-del-border-color);
  border-radius: 0 5px 5px 0;
  color: var(--d2h-del-label-color);
  margin-left: 1px;
  padding: 2px;
  text-align: left;
  vertical-align: middle;
}
.d2h-file-name-wrapper {
  align-items: center;
  display: flex;
  font-size: 15px;
  width: 100%;
}
.d2h-file-name {
  overflow-x: hidden;
  text-overflow: ellipsis;
  white-space: nowrap;
}
.d2h-file-wrapper {
  border: 1px solid var(--d2h-border-color);
  border-radius: 3px;
  margin-bottom: 1em;
}
.d2h-file-collapse {
  align-items: center;
  border: 1px solid var(--d2h-border-color);
  border-radius: 3px;
  cursor: pointer;
  display: none;
  font-size: 12px;
  justify-content: flex-end;
  padding: 4px 8px;
}
.d2h-file-collapse.d2h-selected {
  background-color: var(--d2h-selected-color);
}
.d2h-file-collapse-input {
  margin: 0 4px 0 0;
}
.d2h-diff-table {
  border-collapse: collapse;
  font-family: Menlo, Consolas, monospace;
  font-size: 13px;
  width: 100%;
}
.d2h-files-diff {
  display: flex;
  width: 100%;
}
.d2h-file-diff {
  overflow-y: hidden;
}
.d2h-file-diff.d2h-d-none,
.d2h-files-diff.d2h-d-none {
  display: none;
}
.d2h-file-side-diff {
  display: inline-block;
  overflow-x: scroll;
  overflow-y: hidden;
  width: 50%;
}
.d2h-code-line {
  padding: 0 8em;
  width: calc(100% - 16em);
}
.d2h-code-line,
.d2h-code-side-line {
  display: inline-block;
  -webkit-user-select: none;
  user-select: none;
  white-space: nowrap;
}
.d2h-code-side-line {
  padding: 0 4.5em;
  width: calc(100% - 9em);
}
.d2h-code-line-ctn {
  background: none;
  display: inline-block;
  padding: 0;
  word-wrap: normal;
  -webkit-user-select: text;
  user-select: text;
  vertical-align: middle;
  white-space: pre;
  width: 100%;
}
.d2h-code-line del,
.d2h-code-side-line del {
  background-color: var(--d2h-del-highlight-bg-color);
}
.d2h-code-line del,
.d2h-code-line ins,
.d2h-code-side-line del,
.d2h-code-side-line ins {
  border-radius: 0.2em;
  display: inline-block;
  margin-top: -1px;
  text-decoration: none;
}
.d2h-code-line ins,
.d2h-code-side-line ins {
  background-color: var(--d2h-ins-highlight-bg-color);
  text-align: left;
}
.d2h-code-line-prefix {
  background: none;
  display: inline;
  padding: 0;
  word-wrap: normal;
  white-space: pre;
}
.line-num1 {
  float: left;
}
.line-num1,
.line-num2 {
  box-sizing: border-box;
  overflow: hidden;
  padding: 0 0.5em;
  text-overflow: ellipsis;
  width: 3.5em;
}
.line-num2 {
  float: right;
}
.d2h-code-linenumber {
  background-color: var(--d2h-bg-color);
  border: solid var(--d2h-line-border-color);
  border-width: 0 1px;
  box-sizing: border-box;
  color: var(--d2h-dim-color);
  cursor: pointer;
  display: inline-block;
  position: absolute;
  text-align: right;
  width: 7.5em;
}
.d2h-code-linenumber:after {
  content: "\\200b";
}
.d2h-code-side-linenumber {
  background-color: var(--d2h-bg-color);
  border: solid var(--d2h-line-border-color);
  border-width: 0 1px;
  box-sizing: border-box;
  color: var(--d2h-dim-color);
  cursor: pointer;
  display: inline-block;
  overflow: hidden;
  padding: 0 0.5em;
  position: absolute;
  text-align: right;
  text-overflow: ellipsis;
  width: 4em;
}
.d2h-code-side-linenumber:after {
  content: "\\200b";
}
.d2h-code-side-emptyplaceholder,
.d2h-emptyplaceholder {
  background-color: var(--d2h-empty-placeholder-bg-color);
  border-color: var(--d2h-empty-placeholder-border-color);
}
.d2h-code-line-prefix,
.d2h-code-linenumber,
.d2h-code-side-linenumber,
.d2h-emptyplaceholder {
  -webkit-user-select: none;
  user-select: none;
}
.d2h-code-linenumber,
.d2h-code-side-linenumber {
  direction: rtl;
}
.d2h-del {
  background-color: var(--d2h-del-bg-color);
  border-color: var(--d2h-del-border-color);
}
.d2h-ins {
  background-color: var(--d2h-ins-bg-color);
  border-color: var(--d2h-ins-border-color);
}
.d2h-info {
  background-color: var(--d2h-info-bg-color);
  border-color: var(--d2h-info-border-color);
  color: var(--d2h-dim-color);
}
.d2h-file-diff .d2h-del.d2h-change {
  background-color: var(--d2h-change-del-color);
}
.d2h-file-diff .d2h-ins.d2h-change {
  background-color: var(--d2h-change-ins-color);
}
.d2h-file-list-wrapper {
  margin-bottom: 10px;
}
.d2h-file-list-wrapper a {
  color: var(--d2h-moved-label-color);
  text-decoration: none;
}
.d2h-file-list-header {
  text-align: left;
}
.d2h-file-list-title {
  font-weight: 700;
}
.d2h-file-list-line {
  display: flex;
  text-align: left;
}
.d2h-file-list {
  display: block;
  list-style: none;
  margin: 0;
  padding: 0;
}
.d2h-file-list > li {
  border-bottom: 1px solid var(--d2h-border-color);
  margin: 0;
  padding: 5px 10px;
}
.d2h-file-list > li:last-child {
  border-bottom: none;
}
.d2h-file-switch {
  cursor: pointer;
  display: none;
  font-size: 10px;
}
.d2h-icon {
  fill: currentColor;
  margin-right: 10px;
  vertical-align: middle;
}
.d2h-deleted {
  color: var(--d2h-del-label-color);
}
.d2h-added {
  color: var(--d2h-ins-label-color);
}
.d2h-changed {
  color: var(--d2h-change-label-color);
}
.d2h-moved {
  color: var(--d2h-moved-label-color);
}
.d2h-tag {
  background-color: var(--d2h-bg-color);
  display: flex;
  font-size: 10px;
  margin-left: 5px;
  padding: 0 2px;
}
.d2h-deleted-tag {
  border: 1px solid var(--d2h-del-label-color);
}
.d2h-added-tag {
  border: 1px solid var(--d2h-ins-label-color);
}
.d2h-changed-tag {
  border: 1px solid var(--d2h-change-label-color);
}
.d2h-moved-tag {
  border: 1px solid var(--d2h-moved-label-color);
}
.d2h-dark-color-scheme {
  background-color: var(--d2h-dark-bg-color);
  color: var(--d2h-dark-color);
}
.d2h-dark-color-scheme .d2h-file-header {
  background-color: var(--d2h-dark-file-header-bg-color);
  border-bottom: var(--d2h-dark-border-color);
}
.d2h-dark-color-scheme .d2h-file-wrapper,
.d2h-dark-color-scheme .d2h-file-list > li {
  border-color: var(--d2h-dark-border-color);
}
.d2h-dark-color-scheme .d2h-code-linenumber,
.d2h-dark-color-scheme .d2h-code-side-linenumber {
  background-color: var(--d2h-dark-bg-color);
  border-color: var(--d2h-dark-line-border-color);
  color: var(--d2h-dark-dim-color);
}
.d2h-dark-color-scheme .d2h-del {
  background-color: var(--d2h-dark-del-bg-color);
}
.d2h-dark-color-scheme .d2h-ins {
  background-color: var(--d2h-dark-ins-bg-color);
}
.d2h-dark-color-scheme .d2h-code-line del,
.d2h-dark-color-scheme .d2h-code-side-line del {
  background-color: var(--d2h-dark-del-highlight-bg-color);
}
.d2h-dark-color-scheme .d2h-code-line ins,
.d2h-dark-color-scheme .d2h-code-side-line ins {
  background-color: var(--d2h-dark-ins-highlight-bg-color);
}
.d2h-dark-color-scheme .d2h-info {
  background-color: var(--d2h-dark-info-bg-color);
  color: var(--d2h-dark-dim-color);
}
.d2h-dark-color-scheme .d2h-code-side-emptyplaceholder,
.d2h-dark-color-scheme .d2h-emptyplaceholder {
  background-color: var(--d2h-dark-empty-placeholder-bg-color);
}
@media (prefers-color-scheme: dark) {
  .d2h-auto-color-scheme {
    background-color: var(--d2h-dark-bg-color);
    color: var(--d2h-dark-color);
  }
  .d2h-auto-color-scheme .d2h-file-header {
    background-color: var(--d2h-dark-file-header-bg-color);
  }
  .d2h-auto-color-scheme .d2h-code-linenumber,
  .d2h-auto-color-scheme .d2h-code-side-linenumber {
    background-color: var(--d2h-dark-bg-color);
    color: var(--d2h-dark-dim-color);
  }
  .d2h-auto-color-scheme .d2h-del {
    background-color: var(--d2h-dark-del-bg-color);
  }
  .d2h-auto-color-scheme .d2h-ins {
    background-color: var(--d2h-dark-ins-bg-color);
  }
  .d2h-auto-color-scheme .d2h-info {
    background-color: var(--d2h-dark-info-bg-color);
  }
}
"""
