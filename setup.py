from setuptools import setup


setup(
    name='linkback',
    version='0.1',
    packages=[
        'linkback',
    ],

    description='Library for sites made with Django that sends pingbacks to the pages they link to',
    python_requires='>=3.8',
    install_requires = [
        'html5lib',
        'django',
    ],
    extras_require = {
        'test': ['pytest'],
    },
)
