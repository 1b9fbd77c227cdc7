"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='ami-lang',
	version='0.1.0',
	packages=['ami'],
	entry_points={
		'console_scripts': ["ami = ami.cmdline:main"],
	},
	license='MIT',
	description='A small calculator language where operators applied to functions compose new functions',
	long_description=open('README.md', encoding='utf-8').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.11",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Scientific/Engineering :: Mathematics",
		"Environment :: Console",
    ],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
