"""
Shared pytest fixtures and configuration for objcstyle tests.

This file is automatically discovered by pytest and provides fixtures
that can be used across all test files.

Fixture Organization
--------------------
- **temp_dir**: Temporary directory for file operations
- **clean_header / clean_implementation**: Sources that follow every convention
- **dirty_source**: Source breaking naming and whitespace conventions
- **objc_project**: Directory tree with sources, a vendored dir and a non-source file
- **clean_env**: Removes OBJCSTYLE_* variables and resets CLI verbose mode
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from objcstyle.cli import console as cli_console

ENV_VARS = (
    "OBJCSTYLE_INDENT_STYLE",
    "OBJCSTYLE_MAX_LINE_LENGTH",
    "OBJCSTYLE_CLASS_PREFIXES",
    "OBJCSTYLE_DISABLED_RULES",
)


CLEAN_HEADER = """#import <UIKit/UIKit.h>

NS_ASSUME_NONNULL_BEGIN

extern NSString * const XYZPhotoErrorDomain;
static const NSTimeInterval kXYZAnimationDuration = 0.25;

typedef NS_ENUM(NSInteger, XYZPhotoFilter) {
\tXYZPhotoFilterNone,
\tXYZPhotoFilterSepia = 2,
};

@class XYZPhotoViewController;

@protocol XYZPhotoViewControllerDelegate <NSObject>
- (void)photoViewControllerDidFinish:(XYZPhotoViewController *)controller;
@end

/**
 * Shows a single photo.
 */
@interface XYZPhotoViewController : UIViewController

@property (nonatomic, weak, nullable) id<XYZPhotoViewControllerDelegate> delegate;
@property (nonatomic, copy) NSString *photoTitle;
@property (nonatomic, readonly) NSURL *URL;

+ (instancetype)controllerWithTitle:(NSString *)title;
- (instancetype)initWithTitle:(NSString *)title NS_DESIGNATED_INITIALIZER;
- (void)applyFilter:(XYZPhotoFilter)filter animated:(BOOL)animated;

@end

NS_ASSUME_NONNULL_END
"""

CLEAN_IMPLEMENTATION = """#import "XYZPhotoViewController.h"

NSString * const XYZPhotoErrorDomain = @"XYZPhotoErrorDomain";

@interface XYZPhotoViewController ()
@property (nonatomic, strong) UIImageView *imageView;
@end

@implementation XYZPhotoViewController {
\tNSInteger _filterCount;
}

+ (instancetype)controllerWithTitle:(NSString *)title {
\treturn [[self alloc] initWithTitle:title];
}

- (instancetype)initWithTitle:(NSString *)title {
\tself = [super initWithNibName:nil bundle:nil];
\tif (self) {
\t\t_photoTitle = [title copy];
\t}
\treturn self;
}

- (void)applyFilter:(XYZPhotoFilter)filter animated:(BOOL)animated {
\t_filterCount += 1;
}

@end
"""

# Line numbers matter: tests assert on them
DIRTY_SOURCE = """@interface photo_viewer : NSObject
@property NSString* Title;
- (NSString *)getTitle;
-(void)set_title:(NSString *)New_Title;
@end
#define MAX_PHOTOS 10
    int x = 1;\x20\x20
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory (cleaned up after test)
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_header() -> str:
    """Header that follows every default convention."""
    return CLEAN_HEADER


@pytest.fixture
def clean_implementation() -> str:
    """Implementation that follows every default convention."""
    return CLEAN_IMPLEMENTATION


@pytest.fixture
def dirty_source() -> str:
    """Source breaking naming and whitespace conventions."""
    return DIRTY_SOURCE


@pytest.fixture
def objc_project(temp_dir: Path) -> Path:
    """Create a small project tree.

    Creates:
        - Sources/XYZPhotoViewController.h (clean)
        - Sources/XYZPhotoViewController.m (clean)
        - Sources/Legacy/legacy.m (dirty)
        - Pods/Vendor/vendor.m (dirty, excluded by default)
        - README.txt (not a source file)
    """
    sources = temp_dir / "Sources"
    (sources / "Legacy").mkdir(parents=True)
    (sources / "XYZPhotoViewController.h").write_text(CLEAN_HEADER, encoding="utf-8")
    (sources / "XYZPhotoViewController.m").write_text(CLEAN_IMPLEMENTATION, encoding="utf-8")
    (sources / "Legacy" / "legacy.m").write_text(DIRTY_SOURCE, encoding="utf-8")

    vendor = temp_dir / "Pods" / "Vendor"
    vendor.mkdir(parents=True)
    (vendor / "vendor.m").write_text(DIRTY_SOURCE, encoding="utf-8")

    (temp_dir / "README.txt").write_text("not objective-c\n", encoding="utf-8")
    return temp_dir


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from OBJCSTYLE_* variables and CLI verbose state."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    cli_console.set_verbose_mode(False)
