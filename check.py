#!/usr/bin/env python

from pylint import lint

lint.Run(['--rcfile=pyproject.toml', 'src', 'tests'])
