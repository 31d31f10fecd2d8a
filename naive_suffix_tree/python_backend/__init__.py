'''Pure Python backend: naive suffix tree construction and its queries.'''
