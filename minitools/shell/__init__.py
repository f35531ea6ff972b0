"""An interactive shell with built-ins, history, completion, pipes and redirection."""