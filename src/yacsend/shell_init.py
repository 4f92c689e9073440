"""Shell completion scripts for ``yacsend shell-init``."""

from __future__ import annotations

from yacsend.models import YacsendError

ZSH_COMPLETION = r"""#compdef yacsend

_yacsend_send() {
  _arguments -s \
    '(-a --all)'{-a,--all}'[send all regions]' \
    '(-n --name)'{-n,--name}'[send region with this name]:name:' \
    '*'{-t,--tag}'[send regions with this tag]:tag:' \
    '(-l --line)'{-l,--line}'[send region at this line]:line:' \
    '*:request file:_files -g "*.(http|rest)(-.)" -/'
}

_yacsend() {
  local curcontext="$curcontext" state line
  typeset -A opt_args

  _arguments -C \
    '(-h --help)'{-h,--help}'[show help]' \
    '1:command:->command' \
    '*::arg:->args'

  case $state in
    command)
      local -a commands
      commands=(
        'send:select and send regions of request files'
        'shell-init:generate shell completion script'
      )
      _describe -t commands 'yacsend command' commands
      ;;
    args)
      case $line[1] in
        send) _yacsend_send ;;
        shell-init) _values 'shell' zsh bash ;;
      esac
      ;;
  esac
}

compdef _yacsend yacsend
"""


class UnsupportedShellError(YacsendError):
    """No completion script exists for the requested shell."""


def completion_script(shell: str) -> str:
    name = shell.lower()
    if name == "zsh":
        return ZSH_COMPLETION
    if name == "bash":
        raise UnsupportedShellError("Bash completion is not yet supported. Contributions welcome!")
    raise UnsupportedShellError(f"Unknown shell: {shell}. Supported shells: zsh")
