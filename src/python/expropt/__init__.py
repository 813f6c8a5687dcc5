""" expropt: rule-based rewriting of addition expressions with pattern transforms """
