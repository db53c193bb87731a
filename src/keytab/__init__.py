# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Reading a keytab file:
# stage 1: lexer.tokenize turns each line into tokens (title, or key + sequence + result)
# stage 2: sequence.decode_sequence turns the key sequence into a key code plus modifier/state requirements
# stage 3: reader.KeytabReader assembles entries and hands them out one at a time
# translator.KeyboardTranslator collects the entries of one file and finds the one matching a key press.
