"""Static parts of the generated catalog page.

Markers of the form __NAME__ are filled in by the renderer. The catalog
data itself is embedded as JSON in the #catalog-data script element and
read by CATALOG_SCRIPT at load time.
"""

PAGE_STYLE = """
    :root {
      --color-primary: #1976d2;
      --color-primary-dark: #0d47a1;
      --color-primary-light: #bbdefb;
      --color-text: #333;
      --color-text-secondary: #555;
      --color-background: #f5f7fa;
      --color-card: #fff;
      --color-card-hover: #e8f0fe;
      --color-border: #e0e0e0;
      --shadow-sm: 0 2px 6px rgba(0,0,0,0.08);
      --shadow-md: 0 4px 12px rgba(0,0,0,0.12);
      --radius-sm: 8px;
      --radius-md: 12px;
      --transition: 0.3s ease;
      --font-family: 'Inter', -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto,
                     Oxygen, Ubuntu, Cantarell, "Open Sans", "Helvetica Neue", sans-serif;
    }

    [data-theme="dark"] {
      --color-primary: #90caf9;
      --color-primary-dark: #64b5f6;
      --color-primary-light: #1e3a5f;
      --color-text: #e0e0e0;
      --color-text-secondary: #aaa;
      --color-background: #121212;
      --color-card: #1e1e1e;
      --color-card-hover: #2c2c2c;
      --color-border: #333;
      --shadow-sm: 0 2px 6px rgba(0,0,0,0.3);
      --shadow-md: 0 4px 12px rgba(0,0,0,0.4);
    }

    * { box-sizing: border-box; margin: 0; padding: 0; }
    html { scroll-behavior: smooth; }

    body {
      font-family: var(--font-family);
      background-color: var(--color-background);
      color: var(--color-text);
      display: flex;
      flex-direction: column;
      min-height: 100vh;
      line-height: 1.6;
      transition: background-color var(--transition), color var(--transition);
    }

    header {
      background-color: var(--color-primary);
      color: white;
      padding: 1.5rem 1rem;
      text-align: center;
      box-shadow: var(--shadow-sm);
    }

    .header-content { max-width: 1200px; margin: 0 auto; }
    h1 { font-size: 2.5rem; margin-bottom: 0.5rem; font-weight: 700; }
    p.subtitle { color: rgba(255, 255, 255, 0.9); font-size: 1.1rem; margin-bottom: 1rem; }

    .controls {
      display: flex;
      justify-content: space-between;
      align-items: center;
      flex-wrap: wrap;
      gap: 0.5rem;
      max-width: 1200px;
      margin: -1.5rem auto 0;
      padding: 1rem;
      background-color: var(--color-card);
      border-radius: var(--radius-md);
      box-shadow: var(--shadow-sm);
      position: relative;
      z-index: 10;
    }

    .search-container { position: relative; flex: 1; min-width: 200px; }

    #searchInput {
      width: 100%;
      padding: 0.75rem 1rem 0.75rem 2.5rem;
      border: 1px solid var(--color-border);
      border-radius: var(--radius-sm);
      font-size: 1rem;
      background-color: var(--color-card);
      color: var(--color-text);
    }

    #searchInput:focus {
      outline: none;
      border-color: var(--color-primary);
      box-shadow: 0 0 0 3px var(--color-primary-light);
    }

    .search-icon {
      position: absolute;
      left: 0.75rem;
      top: 50%;
      transform: translateY(-50%);
      pointer-events: none;
    }

    .filter-container { display: flex; gap: 0.5rem; align-items: center; }

    #categoryFilter {
      padding: 0.75rem 1rem;
      border: 1px solid var(--color-border);
      border-radius: var(--radius-sm);
      font-size: 1rem;
      background-color: var(--color-card);
      color: var(--color-text);
      cursor: pointer;
    }

    #darkModeToggle {
      background: none;
      border: none;
      width: 40px;
      height: 40px;
      font-size: 1.5rem;
      cursor: pointer;
      border-radius: 50%;
    }

    #darkModeToggle:focus { outline: 3px solid var(--color-primary-light); outline-offset: 2px; }

    .container { max-width: 1200px; margin: 0 auto; padding: 2rem 1rem; width: 100%; flex-grow: 1; }

    .category-title {
      margin: 2rem 0 1rem;
      padding-bottom: 0.5rem;
      border-bottom: 2px solid var(--color-primary);
      font-size: 1.5rem;
      font-weight: 600;
    }

    .cards-grid {
      display: grid;
      grid-template-columns: repeat(auto-fill, minmax(280px, 1fr));
      gap: 1.5rem;
      margin-bottom: 2rem;
    }

    .card {
      display: flex;
      flex-direction: column;
      background-color: var(--color-card);
      border: 1px solid var(--color-border);
      border-radius: var(--radius-md);
      box-shadow: var(--shadow-sm);
      text-decoration: none;
      color: var(--color-text);
      overflow: hidden;
      transition: all var(--transition);
      animation: fadeIn 0.3s ease-out;
    }

    .card:hover, .card:focus {
      transform: translateY(-4px);
      box-shadow: var(--shadow-md);
      border-color: var(--color-primary);
      outline: none;
    }

    .card-header { padding: 1.25rem 1.25rem 0.75rem; display: flex; align-items: center; gap: 0.75rem; }
    .card-icon { font-size: 2.5rem; user-select: none; }
    .card-title { font-weight: 600; font-size: 1.2rem; flex-grow: 1; }
    .card-body { padding: 0 1.25rem 1.25rem; flex-grow: 1; display: flex; flex-direction: column; }
    .card-desc { font-size: 0.95rem; color: var(--color-text-secondary); margin-bottom: 1rem; flex-grow: 1; }
    .card-meta { display: flex; flex-direction: column; gap: 0.5rem; font-size: 0.85rem; color: var(--color-text-secondary); }
    .meta-row { display: flex; justify-content: space-between; align-items: center; }

    .card-category {
      background-color: var(--color-primary-light);
      color: var(--color-primary-dark);
      padding: 0.25rem 0.5rem;
      border-radius: var(--radius-sm);
      font-weight: 500;
      font-size: 0.8rem;
    }

    [data-theme="dark"] .card-category {
      background-color: var(--color-primary-dark);
      color: var(--color-primary-light);
    }

    .card-hash { font-family: monospace; font-size: 0.7rem; opacity: 0.7; word-break: break-all; }
    .card-date { font-size: 0.8rem; }

    footer {
      background-color: var(--color-card);
      color: var(--color-text-secondary);
      text-align: center;
      padding: 1.5rem;
      margin-top: auto;
      border-top: 1px solid var(--color-border);
    }

    .no-results { text-align: center; padding: 3rem 1rem; color: var(--color-text-secondary); font-size: 1.2rem; }

    @keyframes fadeIn {
      from { opacity: 0; transform: translateY(10px); }
      to { opacity: 1; transform: translateY(0); }
    }

    @media (max-width: 768px) {
      h1 { font-size: 2rem; }
      .controls { flex-direction: column; align-items: stretch; }
      .filter-container { justify-content: space-between; }
    }

    @media (max-width: 480px) {
      .cards-grid { grid-template-columns: 1fr; }
      .card-header { flex-direction: column; text-align: center; }
    }

    .sr-only {
      position: absolute;
      width: 1px;
      height: 1px;
      margin: -1px;
      overflow: hidden;
      clip: rect(0, 0, 0, 0);
      white-space: nowrap;
      border-width: 0;
    }

    #backToTop {
      position: fixed;
      bottom: 2rem;
      right: 2rem;
      width: 50px;
      height: 50px;
      border: none;
      border-radius: 50%;
      background-color: var(--color-primary);
      color: white;
      font-size: 1.5rem;
      cursor: pointer;
      box-shadow: var(--shadow-md);
      opacity: 0;
      visibility: hidden;
      transition: all var(--transition);
    }

    #backToTop.visible { opacity: 1; visibility: visible; }
"""

CATALOG_SCRIPT = """
    const projects = JSON.parse(document.getElementById('catalog-data').textContent);
    const THEME_KEY = 'darkMode';

    // Record strings arrive HTML-escaped; decode them for attributes and option labels.
    function decodeEntities(text) {
      const area = document.createElement('textarea');
      area.innerHTML = text;
      return area.value;
    }

    function prefersDark() {
      return window.matchMedia && window.matchMedia('(prefers-color-scheme: dark)').matches;
    }

    function applyTheme() {
      const stored = localStorage.getItem(THEME_KEY);
      const dark = stored === null ? prefersDark() : stored === 'true';
      document.body.setAttribute('data-theme', dark ? 'dark' : 'light');
      const toggleBtn = document.getElementById('darkModeToggle');
      toggleBtn.setAttribute('aria-pressed', dark.toString());
      toggleBtn.textContent = dark ? '\\u2600\\ufe0f' : '\\ud83c\\udf19';
    }

    function organizeByCategory(list) {
      const categories = Object.create(null);
      list.forEach(project => {
        if (!categories[project.category]) {
          categories[project.category] = [];
        }
        categories[project.category].push(project);
      });
      return categories;
    }

    function slugify(text) {
      return decodeEntities(text).toLowerCase().replace(/[^a-z0-9]+/g, '-').replace(/^-+|-+$/g, '');
    }

    function renderProjects(list) {
      const container = document.getElementById('projectsContainer');
      container.innerHTML = '';

      if (list.length === 0) {
        container.innerHTML = '<div class="no-results">__NO_RESULTS__</div>';
        return;
      }

      const grouped = organizeByCategory(list);
      Object.keys(grouped).sort().forEach(category => {
        const section = document.createElement('section');
        section.innerHTML = `
          <h2 class="category-title">${category}</h2>
          <div class="cards-grid" id="grid-${slugify(category)}"></div>
        `;
        container.appendChild(section);
        const grid = section.querySelector('.cards-grid');

        grouped[category].forEach(proj => {
          const card = document.createElement('a');
          card.className = 'card';
          card.href = proj.path;
          card.setAttribute('target', '_blank');
          card.setAttribute('rel', 'noopener');
          card.setAttribute('aria-label', decodeEntities(proj.title) + ' - __OPENS_IN_NEW_TAB__');
          card.setAttribute('data-category', decodeEntities(proj.category));
          card.setAttribute('data-id', proj.id);
          card.setAttribute('data-hash', proj.fileHash);
          card.innerHTML = `
            <div class="card-header">
              <div class="card-icon" aria-hidden="true">${proj.icon}</div>
              <div class="card-title">${proj.title}</div>
            </div>
            <div class="card-body">
              <p class="card-desc">${proj.description}</p>
              <div class="card-meta">
                <div class="meta-row">
                  <span class="card-category">${proj.category}</span>
                  <span class="card-date">${proj.lastModified}</span>
                </div>
                <div class="meta-row">
                  <span class="card-hash" title="__HASH_LABEL__">${proj.fileHash}</span>
                </div>
              </div>
            </div>
          `;
          grid.appendChild(card);
        });
      });
    }

    function populateCategoryFilter(list) {
      const categories = [...new Set(list.map(p => p.category))].sort();
      const select = document.getElementById('categoryFilter');
      categories.forEach(cat => {
        const option = document.createElement('option');
        option.value = cat;
        option.textContent = decodeEntities(cat);
        select.appendChild(option);
      });
    }

    function filterProjects() {
      const term = document.getElementById('searchInput').value.trim().toLowerCase();
      const catFilter = document.getElementById('categoryFilter').value;

      let filtered = projects;
      if (catFilter !== 'all') {
        filtered = filtered.filter(p => p.category === catFilter);
      }
      if (term) {
        filtered = filtered.filter(p =>
          decodeEntities(p.title).toLowerCase().includes(term) ||
          decodeEntities(p.description).toLowerCase().includes(term) ||
          decodeEntities(p.category).toLowerCase().includes(term)
        );
      }
      renderProjects(filtered);
    }

    document.addEventListener('DOMContentLoaded', () => {
      applyTheme();
      renderProjects(projects);
      populateCategoryFilter(projects);
      document.getElementById('searchInput').addEventListener('input', filterProjects);
      document.getElementById('categoryFilter').addEventListener('change', filterProjects);

      document.getElementById('darkModeToggle').addEventListener('click', () => {
        const dark = document.body.getAttribute('data-theme') === 'dark';
        localStorage.setItem(THEME_KEY, (!dark).toString());
        applyTheme();
      });

      const backToTop = document.getElementById('backToTop');
      window.addEventListener('scroll', () => {
        backToTop.classList.toggle('visible', window.scrollY > 300);
      });
      backToTop.addEventListener('click', () => {
        window.scrollTo({ top: 0, behavior: 'smooth' });
      });
    });
"""

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="__LANG__">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <meta name="description" content="__DESCRIPTION__" />
  <meta name="keywords" content="__KEYWORDS__" />
  <meta name="author" content="__AUTHOR__" />
  <meta name="theme-color" content="#1976d2" />
  <title>__TITLE__</title>
  <style>__STYLE__  </style>
</head>
<body>
  <header>
    <div class="header-content">
      <h1>__TITLE__</h1>
      <p class="subtitle">__SUBTITLE__</p>
    </div>
  </header>

  <div class="container">
    <div class="controls">
      <div class="search-container">
        <span class="search-icon" aria-hidden="true">&#128269;</span>
        <input type="text" id="searchInput" placeholder="__SEARCH_PLACEHOLDER__" aria-label="__SEARCH_PLACEHOLDER__">
      </div>
      <div class="filter-container">
        <label for="categoryFilter" class="sr-only">__FILTER_LABEL__</label>
        <select id="categoryFilter" aria-label="__FILTER_LABEL__">
          <option value="all">__ALL_CATEGORIES__</option>
        </select>
        <button id="darkModeToggle" aria-pressed="false" aria-label="__THEME_LABEL__">&#127769;</button>
      </div>
    </div>

    <div id="projectsContainer"></div>
  </div>

  <footer>
    <div class="footer-content">__FOOTER__</div>
  </footer>

  <button id="backToTop" aria-label="__BACK_TO_TOP__" title="__BACK_TO_TOP__">&#8593;</button>

  <script id="catalog-data" type="application/json">
__CATALOG_DATA__
  </script>
  <script>__SCRIPT__  </script>
</body>
</html>
"""
