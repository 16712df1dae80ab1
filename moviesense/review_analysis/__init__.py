# moviesense/review_analysis/__init__.py
