from site_crawler.parser.html_parser import ExtractedContent, extract_main_content

__all__ = ["ExtractedContent", "extract_main_content"]
